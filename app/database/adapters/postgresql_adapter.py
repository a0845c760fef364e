# ==============================================================================
# POSTGRESQL ADAPTER - asyncpg Connection Pool
# ==============================================================================
# Production engine: native `$N` placeholders and native RETURNING
# Transactions pin one pooled connection for their whole lifetime
# ==============================================================================

from __future__ import annotations

import logging
import ssl
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Sequence

import asyncpg

from app.core.exceptions import DatabaseError, EngineError
from app.core.settings import DatabaseType
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.database.results import ExecutionResult
from app.database.translator import CompiledStatement, ParamStyle

logger = logging.getLogger(__name__)

DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


def parse_command_tag(status: Optional[str]) -> Optional[int]:
    """
    Extract the row count from a PostgreSQL command tag.

    Examples:
        "INSERT 0 1" -> 1, "UPDATE 3" -> 3, "DELETE 0" -> 0, "CREATE TABLE" -> None
    """
    if not status:
        return None
    last = status.split()[-1]
    return int(last) if last.isdigit() else None


def relaxed_ssl_context() -> ssl.SSLContext:
    """TLS without certificate verification, as hosted Postgres providers expect."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class PostgreSQLAdapter(BaseDatabaseAdapter):
    """
    PostgreSQL database adapter using an asyncpg pool.

    Statements run as written: PostgreSQL accepts ``$N`` placeholders and
    RETURNING natively. Outside a transaction each statement borrows any
    free pooled connection; inside one, the transaction's connection is
    used for every statement the owning task issues.

    Attributes:
        _dsn: PostgreSQL connection string
        _pool: asyncpg pool once connected

    Example:
        >>> adapter = PostgreSQLAdapter(dsn="postgresql://localhost/surgical")
        >>> await adapter.connect()
        >>> async with adapter.transaction() as tx:
        ...     await tx.execute("UPDATE orders SET status = $1 WHERE id = $2", ["shipped", oid])
    """

    database_type = DatabaseType.POSTGRESQL
    paramstyle = ParamStyle.NUMERIC
    native_returning = True

    def __init__(
        self,
        dsn: str,
        min_size: int = 1,
        max_size: int = 10,
        ssl_required: bool = False,
    ) -> None:
        """
        Initialize PostgreSQL adapter.

        Args:
            dsn: PostgreSQL connection URL
            min_size: Connections opened eagerly
            max_size: Upper bound on pooled connections
            ssl_required: Negotiate TLS without verifying the certificate
        """
        super().__init__()
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max(min_size, max_size)
        self._ssl_required = ssl_required
        self._pool: Optional[asyncpg.Pool] = None

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """Create the connection pool."""
        if self._pool is not None:
            return
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                ssl=relaxed_ssl_context() if self._ssl_required else None,
            )
            logger.info(
                f"PostgreSQL adapter connected (pool {self._min_size}-{self._max_size})"
            )
        except DRIVER_ERRORS as e:
            logger.error(f"Failed to connect to PostgreSQL: {e}")
            raise DatabaseError(f"PostgreSQL connection failed: {e}") from e

    async def disconnect(self) -> None:
        """Close every pooled connection."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("PostgreSQL adapter disconnected")

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    # ==========================================================================
    # ENGINE HOOKS
    # ==========================================================================

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[asyncpg.Connection]:
        if self._pool is None:
            raise DatabaseError("Database not connected. Call connect() first.")
        try:
            connection = await self._pool.acquire()
        except DRIVER_ERRORS as e:
            raise EngineError(f"Could not acquire connection: {e}", original=e) from e
        try:
            yield connection
        finally:
            await self._pool.release(connection)

    async def _control_on(self, session: asyncpg.Connection, verb: str) -> None:
        try:
            await session.execute(verb)
        except DRIVER_ERRORS as e:
            raise EngineError(f"{verb} failed: {e}", original=e, statement=verb) from e

    async def _execute_on(
        self,
        session: asyncpg.Connection,
        compiled: CompiledStatement,
        params: Sequence[Any],
    ) -> ExecutionResult:
        try:
            if compiled.returns_rows:
                records = await session.fetch(compiled.sql, *params)
                rows = [dict(record) for record in records]
                if compiled.is_read:
                    return ExecutionResult(rows=rows)
                return ExecutionResult(rows=rows, affected_count=len(rows))

            status = await session.execute(compiled.sql, *params)
            return ExecutionResult(affected_count=parse_command_tag(status))

        except DRIVER_ERRORS as e:
            logger.debug(f"PostgreSQL rejected statement: {compiled.sql} ({e})")
            raise EngineError(str(e), original=e, statement=compiled.sql) from e
