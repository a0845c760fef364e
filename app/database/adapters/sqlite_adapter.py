# ==============================================================================
# SQLITE ADAPTER - aiosqlite Single Connection
# ==============================================================================
# Embedded engine for local development and tests
# One shared handle, `?` placeholders, RETURNING emulated by re-fetch
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from decimal import Decimal
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

import aiosqlite

from app.core.exceptions import DatabaseError, EngineError, TranslationAmbiguity
from app.core.settings import DatabaseType
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.database.results import ExecutionResult
from app.database.translator import CompiledStatement, ParamStyle, is_update, where_predicate

logger = logging.getLogger(__name__)


def adapt_param(value: Any) -> Any:
    """Convert values sqlite3 cannot bind (Decimal money amounts)."""
    if isinstance(value, Decimal):
        return float(value)
    return value


class SQLiteAdapter(BaseDatabaseAdapter):
    """
    SQLite database adapter using aiosqlite.

    Ideal for development, testing, and small-scale deployments.
    Provides the same interface as PostgreSQLAdapter for seamless
    database switching.

    Features:
        - One connection shared by every caller, guarded by an asyncio.Lock
        - ``$N`` statements rewritten to ``?`` with parameters bound by number
        - RETURNING emulated by re-reading the written row through ``rowid``
        - Foreign keys enforced on every connection
        - File-based or in-memory database support

    A transaction keeps the lock from BEGIN to COMMIT/ROLLBACK, so
    statements from other tasks wait and never land inside it.

    Attributes:
        _path: Database file path or ``:memory:``
        _connection: aiosqlite connection once connected
        _lock: Serializes access to the single connection

    Example:
        >>> adapter = SQLiteAdapter("./db.sqlite")
        >>> await adapter.connect()
        >>> result = await adapter.execute(
        ...     "INSERT INTO categories (id, name) VALUES ($1, $2) RETURNING *",
        ...     ["c1", "Surgical"],
        ... )
        >>> result.rows[0]["name"]
        'Surgical'
    """

    database_type = DatabaseType.SQLITE
    paramstyle = ParamStyle.QMARK
    native_returning = False

    def __init__(self, path: str = "./db.sqlite") -> None:
        """
        Initialize SQLite adapter.

        Args:
            path: Database file path, or ``:memory:``
        """
        super().__init__()
        self._path = path
        self._connection: Optional[aiosqlite.Connection] = None
        self._lock = asyncio.Lock()

    @property
    def path(self) -> str:
        return self._path

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """
        Open the database file and configure the connection.

        Autocommit mode is used so that BEGIN/COMMIT/ROLLBACK issued by
        the transaction coordinator are the only transaction boundaries.
        """
        if self._connection is not None:
            return
        try:
            if self._path != ":memory:":
                Path(self._path).parent.mkdir(parents=True, exist_ok=True)

            self._connection = await aiosqlite.connect(self._path, isolation_level=None)
            self._connection.row_factory = aiosqlite.Row
            await self._connection.execute("PRAGMA foreign_keys = ON")

            logger.info(f"SQLite adapter connected: {self._path}")

        except (aiosqlite.Error, OSError) as e:
            logger.error(f"Failed to connect to SQLite: {e}")
            raise DatabaseError(f"SQLite connection failed: {e}") from e

    async def disconnect(self) -> None:
        """Close the connection."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
            logger.info("SQLite adapter disconnected")

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    # ==========================================================================
    # ENGINE HOOKS
    # ==========================================================================

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._connection is None:
            raise DatabaseError("Database not connected. Call connect() first.")
        async with self._lock:
            yield self._connection

    async def _control_on(self, session: aiosqlite.Connection, verb: str) -> None:
        try:
            await session.execute(verb)
        except aiosqlite.Error as e:
            raise EngineError(f"{verb} failed: {e}", original=e, statement=verb) from e

    async def _execute_on(
        self,
        session: aiosqlite.Connection,
        compiled: CompiledStatement,
        params: Sequence[Any],
    ) -> ExecutionResult:
        values = tuple(adapt_param(p) for p in params)

        # UPDATE ... RETURNING: note the target rows before they change
        targeted: Optional[List[int]] = None
        if compiled.emulate_returning and compiled.table and is_update(compiled.sql):
            targeted = await self._rowids_matching(session, compiled, values)

        try:
            async with session.execute(compiled.sql, values) as cursor:
                if compiled.is_read:
                    rows = await cursor.fetchall()
                    return ExecutionResult(rows=[dict(row) for row in rows])
                last_id = cursor.lastrowid
                changes = cursor.rowcount
        except aiosqlite.Error as e:
            logger.debug(f"SQLite rejected statement: {compiled.sql} ({e})")
            raise EngineError(str(e), original=e, statement=compiled.sql) from e

        result = ExecutionResult(last_insert_id=last_id, affected_count=changes)
        if not compiled.emulate_returning:
            return result

        if targeted is not None:
            if changes:
                result.rows = await fetch_by_rowid(
                    session, compiled.table, targeted, compiled.returning or "*"
                )
        else:
            result.rows = await self._emulate_returning(session, compiled, last_id, changes)
        return result

    # ==========================================================================
    # RETURNING EMULATION
    # ==========================================================================

    async def _rowids_matching(
        self,
        session: aiosqlite.Connection,
        compiled: CompiledStatement,
        values: Sequence[Any],
    ) -> List[int]:
        """
        Rowids of the rows an UPDATE is about to change.

        The WHERE clause follows the SET list, so its placeholders are the
        last ones bound.
        """
        predicate = where_predicate(compiled.sql)
        if predicate is None:
            sql, bound = f"SELECT rowid FROM {compiled.table}", ()
        else:
            marks = predicate.count("?")
            sql = f"SELECT rowid FROM {compiled.table} WHERE {predicate}"
            bound = tuple(values[len(values) - marks:]) if marks else ()
        rows = await _fetch(session, sql, bound)
        return [row[0] for row in rows]

    async def _emulate_returning(
        self,
        session: aiosqlite.Connection,
        compiled: CompiledStatement,
        last_insert_id: Optional[int],
        changes: Optional[int],
    ) -> List[Dict[str, Any]]:
        """
        Re-read the row an INSERT just wrote.

        Looks the row up by SQLite's implicit ``rowid`` using the
        connection's last insert id. Degrades to an empty list when the
        target table is unknown, no id is available, or the write changed
        nothing.
        """
        try:
            table = compiled.returning_target()
        except TranslationAmbiguity as e:
            logger.warning(f"{e.message}: {compiled.sql}")
            return []

        if last_insert_id is None or not changes:
            return []

        return await emulate_returning(
            session, table, last_insert_id, compiled.returning or "*"
        )


async def _fetch(
    connection: aiosqlite.Connection,
    sql: str,
    params: Sequence[Any],
) -> List[aiosqlite.Row]:
    try:
        async with connection.execute(sql, tuple(params)) as cursor:
            return list(await cursor.fetchall())
    except aiosqlite.Error as e:
        raise EngineError(str(e), original=e, statement=sql) from e


async def fetch_by_rowid(
    connection: aiosqlite.Connection,
    table: str,
    rowids: Sequence[int],
    columns: str = "*",
) -> List[Dict[str, Any]]:
    """Fetch ``columns`` of the rows with the given ``rowid`` values, in rowid order."""
    if not rowids:
        return []
    marks = ", ".join("?" for _ in rowids)
    sql = f"SELECT {columns} FROM {table} WHERE rowid IN ({marks}) ORDER BY rowid"
    return [dict(row) for row in await _fetch(connection, sql, rowids)]


async def emulate_returning(
    connection: aiosqlite.Connection,
    table: str,
    last_insert_id: int,
    columns: str = "*",
) -> List[Dict[str, Any]]:
    """
    Fetch ``columns`` of the row whose ``rowid`` equals ``last_insert_id``.

    Args:
        connection: Connection the write was issued on
        table: Table parsed from the write
        last_insert_id: Engine-assigned row identifier
        columns: Column list from the RETURNING clause

    Returns:
        The matching row(s) as dictionaries
    """
    return await fetch_by_rowid(connection, table, [last_insert_id], columns)
