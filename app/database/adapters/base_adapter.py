# ==============================================================================
# BASE DATABASE ADAPTER - Abstract Interface
# ==============================================================================
# Defines the contract shared by the SQLite and PostgreSQL adapters
# One query interface, one result shape, one transaction model
# ==============================================================================

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import (
    Any,
    AsyncContextManager,
    AsyncIterator,
    Optional,
    Sequence,
)

from app.core.exceptions import DatabaseError
from app.core.settings import DatabaseType
from app.database.results import ExecutionResult
from app.database.statements import StatementShape
from app.database.transaction import (
    BEGIN,
    COMMIT,
    ROLLBACK,
    Transaction,
    TransactionCoordinator,
    control_verb,
)
from app.database.translator import CompiledStatement, ParamStyle, translate

logger = logging.getLogger(__name__)


class BaseDatabaseAdapter(ABC):
    """
    Abstract Base Class for Database Adapters.

    Provides one execution interface over engines with different
    placeholder syntax, RETURNING support and connection models.
    Concrete adapters only supply sessions and run compiled statements on
    them; translation, transaction bookkeeping and result normalization
    live here.

    Class Attributes:
        database_type: Engine implemented by the adapter
        paramstyle: Placeholder dialect the engine accepts
        native_returning: Whether the engine executes RETURNING itself

    Thread Safety:
        All methods are async and safe for concurrent tasks. A
        transaction belongs to the task that opened it.

    Example:
        >>> adapter = create_adapter(settings)
        >>> await adapter.connect()
        >>> result = await adapter.execute(
        ...     "SELECT * FROM products WHERE id = $1", ["missing"]
        ... )
        >>> result.rows
        []
        >>> await adapter.disconnect()
    """

    database_type: DatabaseType
    paramstyle: ParamStyle
    native_returning: bool

    def __init__(self) -> None:
        self._coordinator = TransactionCoordinator(self)

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish the engine connection (single handle or pool).

        Must be called before any statement is executed.

        Raises:
            DatabaseError: If the connection cannot be established
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the connection or pool. Safe to call twice."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether ``connect()`` has completed and ``disconnect()`` has not."""

    async def health_check(self) -> bool:
        """
        Check if the database answers a trivial query.

        Returns:
            True if the connection is healthy, False otherwise
        """
        if not self.is_connected:
            return False
        try:
            await self.execute("SELECT 1")
            return True
        except DatabaseError as e:
            logger.warning(f"{self.database_type.value} health check failed: {e.message}")
            return False

    # ==========================================================================
    # ENGINE HOOKS
    # ==========================================================================

    @abstractmethod
    def _session(self) -> AsyncContextManager[Any]:
        """
        Check a session out for the duration of the context.

        SQLite yields its single connection under a lock; PostgreSQL
        yields a pooled connection.
        """

    @abstractmethod
    async def _execute_on(
        self,
        session: Any,
        compiled: CompiledStatement,
        params: Sequence[Any],
    ) -> ExecutionResult:
        """
        Run one compiled statement on ``session``.

        Raises:
            EngineError: If the engine rejects the statement
        """

    @abstractmethod
    async def _control_on(self, session: Any, verb: str) -> None:
        """Issue BEGIN, COMMIT or ROLLBACK on ``session``."""

    # ==========================================================================
    # STATEMENT EXECUTION
    # ==========================================================================

    async def execute(
        self,
        statement: str,
        params: Optional[Sequence[Any]] = None,
    ) -> ExecutionResult:
        """
        Execute a ``$N`` statement and normalize its result.

        Literal ``BEGIN``/``COMMIT``/``ROLLBACK`` are routed to the
        transaction coordinator instead of the engine.

        Args:
            statement: Statement text using ``$1, $2, ...`` placeholders
            params: Values bound positionally to the placeholders

        Returns:
            ExecutionResult with rows, and id/count for writes

        Raises:
            EngineError: If the engine rejects the statement
            TransactionError: If transaction control is used out of order
        """
        verb = control_verb(statement)
        if verb == BEGIN:
            await self.begin()
            return ExecutionResult()
        if verb is not None:
            await self._coordinator.end(verb)
            return ExecutionResult()
        return await self._execute_text(statement, params)

    async def query(
        self,
        statement: str,
        params: Optional[Sequence[Any]] = None,
    ) -> ExecutionResult:
        """Alias of ``execute`` matching the call sites' query(text, params) style."""
        return await self.execute(statement, params)

    async def run(self, shape: StatementShape) -> ExecutionResult:
        """
        Execute a statement shape compiled for this engine.

        Args:
            shape: Structured single-table statement

        Returns:
            ExecutionResult, with RETURNING rows on both engines
        """
        return await self._execute_shape(shape)

    async def _execute_text(
        self,
        statement: str,
        params: Optional[Sequence[Any]],
        transaction: Optional[Transaction] = None,
    ) -> ExecutionResult:
        compiled = translate(statement, self.paramstyle)
        return await self._dispatch(compiled, compiled.bind(params), transaction)

    async def _execute_shape(
        self,
        shape: StatementShape,
        transaction: Optional[Transaction] = None,
    ) -> ExecutionResult:
        compiled = shape.compile(self.paramstyle, native_returning=self.native_returning)
        return await self._dispatch(compiled, shape.params, transaction)

    async def _dispatch(
        self,
        compiled: CompiledStatement,
        params: Sequence[Any],
        transaction: Optional[Transaction] = None,
    ) -> ExecutionResult:
        transaction = transaction or self._coordinator.current()
        if transaction is not None:
            transaction._ensure_active()
            return await self._execute_on(transaction.session, compiled, params)
        async with self._session() as session:
            return await self._execute_on(session, compiled, params)

    # ==========================================================================
    # TRANSACTIONS
    # ==========================================================================

    async def begin(self) -> Transaction:
        """
        Open a transaction bound to the calling task.

        Returns:
            Transaction handle; statements from this task use its session

        Raises:
            TransactionError: If this task already has one open
        """
        return await self._coordinator.begin()

    async def commit(self) -> None:
        """
        Commit the calling task's transaction.

        Raises:
            TransactionError: If no transaction is open
        """
        await self._coordinator.end(COMMIT)

    async def rollback(self) -> None:
        """Roll back the calling task's transaction; a no-op when none is open."""
        await self._coordinator.end(ROLLBACK)

    def current_transaction(self) -> Optional[Transaction]:
        return self._coordinator.current()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Transaction]:
        """
        Provide a transactional scope.

        Commits on successful exit, rolls back on exception.

        Yields:
            Transaction handle

        Example:
            >>> async with adapter.transaction() as tx:
            ...     await tx.execute("INSERT INTO orders (id) VALUES ($1)", [order_id])
        """
        transaction = await self.begin()
        try:
            yield transaction
        except BaseException:
            if transaction.is_active:
                try:
                    await transaction.rollback()
                except DatabaseError as e:
                    logger.error(f"Rollback of transaction {transaction.id} failed: {e.message}")
            raise
        else:
            if transaction.is_active:
                await transaction.commit()
