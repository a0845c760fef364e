# ==============================================================================
# TRANSACTION COORDINATOR - Task-Scoped Transaction Handles
# ==============================================================================
# BEGIN checks a session out of the adapter and pins it to the calling
# task; COMMIT/ROLLBACK end the transaction and hand the session back.
# ==============================================================================

"""
Transaction coordination.

A transaction is a ``Transaction`` handle bound to the asyncio task that
opened it. While it is active, every statement that task issues through
the adapter runs on the handle's session, so BEGIN, the statements in
between, and COMMIT/ROLLBACK always share one connection. Other tasks
keep using the adapter normally (on SQLite they wait for the handle to
finish, because the engine has a single connection).

State machine per task::

    IDLE --BEGIN--> ACTIVE --COMMIT--> COMMITTED
                           --ROLLBACK--> ROLLED_BACK

BEGIN while ACTIVE raises ``TransactionError``; COMMIT with nothing open
raises ``TransactionError``; ROLLBACK with nothing open is ignored. A
transaction still open when its task finishes is rolled back and its
session released, so an abandoned BEGIN cannot hold the connection.
"""

from __future__ import annotations

import asyncio
import logging
import re
import uuid
from contextlib import AsyncExitStack
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence, Set

from app.core.exceptions import DatabaseError, TransactionError

if TYPE_CHECKING:
    from app.database.adapters.base_adapter import BaseDatabaseAdapter
    from app.database.results import ExecutionResult
    from app.database.statements import StatementShape

logger = logging.getLogger(__name__)


BEGIN = "BEGIN"
COMMIT = "COMMIT"
ROLLBACK = "ROLLBACK"

CONTROL_STATEMENT = re.compile(
    r"^\s*(?P<verb>BEGIN|START\s+TRANSACTION|COMMIT|END|ROLLBACK)"
    r"(?:\s+(?:TRANSACTION|WORK))?\s*;?\s*$",
    re.IGNORECASE,
)

_VERBS = {
    "BEGIN": BEGIN,
    "START TRANSACTION": BEGIN,
    "COMMIT": COMMIT,
    "END": COMMIT,
    "ROLLBACK": ROLLBACK,
}


def control_verb(statement: str) -> Optional[str]:
    """
    Recognize a literal transaction-control statement.

    Returns:
        BEGIN, COMMIT or ROLLBACK, or None for data statements
    """
    match = CONTROL_STATEMENT.match(statement)
    if not match:
        return None
    verb = " ".join(match.group("verb").upper().split())
    return _VERBS[verb]


class TransactionState(str, Enum):
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class Transaction:
    """
    Handle for one open transaction.

    Holds the checked-out session until COMMIT or ROLLBACK. Statements can
    be issued through the adapter from the owning task, or through the
    handle itself from any task.

    Attributes:
        id: Short identifier used in log lines
        session: Engine session (connection) pinned for the transaction
        owner: Task that opened the transaction
        state: Current TransactionState
    """

    def __init__(
        self,
        adapter: "BaseDatabaseAdapter",
        session: Any,
        stack: AsyncExitStack,
        owner: Optional[asyncio.Task],
    ) -> None:
        self.id = uuid.uuid4().hex[:8]
        self.session = session
        self.owner = owner
        self.state = TransactionState.ACTIVE
        self._adapter = adapter
        self._stack = stack

    @property
    def is_active(self) -> bool:
        return self.state is TransactionState.ACTIVE

    async def execute(
        self,
        statement: str,
        params: Optional[Sequence[Any]] = None,
    ) -> "ExecutionResult":
        """Execute a ``$N`` statement inside this transaction."""
        self._ensure_active()
        return await self._adapter._execute_text(statement, params, transaction=self)

    async def run(self, shape: "StatementShape") -> "ExecutionResult":
        """Execute a statement shape inside this transaction."""
        self._ensure_active()
        return await self._adapter._execute_shape(shape, transaction=self)

    async def commit(self) -> None:
        await self._adapter._coordinator.finish(self, COMMIT)

    async def rollback(self) -> None:
        await self._adapter._coordinator.finish(self, ROLLBACK)

    async def _release(self) -> None:
        await self._stack.aclose()

    def _ensure_active(self) -> None:
        if not self.is_active:
            raise TransactionError(f"Transaction {self.id} is already {self.state.value}")

    def __repr__(self) -> str:
        return f"Transaction(id='{self.id}', state='{self.state.value}')"


class TransactionCoordinator:
    """
    Tracks which task holds which transaction for one adapter.

    The adapter supplies sessions (``_session()``) and executes control
    verbs on them (``_control_on(session, verb)``); the coordinator owns
    the bookkeeping and the state machine.
    """

    def __init__(self, adapter: "BaseDatabaseAdapter") -> None:
        self._adapter = adapter
        self._active: Dict[asyncio.Task, Transaction] = {}
        self._reclaiming: Set[asyncio.Task] = set()

    @staticmethod
    def _task() -> Optional[asyncio.Task]:
        return asyncio.current_task()

    def current(self) -> Optional[Transaction]:
        """Transaction opened by the calling task, if any."""
        task = self._task()
        if task is None:
            return None
        return self._active.get(task)

    @property
    def active_count(self) -> int:
        return len(self._active)

    async def begin(self) -> Transaction:
        """
        Open a transaction for the calling task.

        Raises:
            TransactionError: If the task already has one open
            EngineError: If the engine rejects BEGIN
        """
        task = self._task()
        if task is not None and task in self._active:
            raise TransactionError(
                "Transaction already in progress; nested transactions are not supported"
            )

        stack = AsyncExitStack()
        session = await stack.enter_async_context(self._adapter._session())
        try:
            await self._adapter._control_on(session, BEGIN)
        except BaseException:
            await stack.aclose()
            raise

        transaction = Transaction(self._adapter, session, stack, task)
        if task is not None:
            self._active[task] = transaction
            task.add_done_callback(lambda _: self._owner_finished(transaction))
        logger.debug(f"Transaction {transaction.id} started")
        return transaction

    async def end(self, verb: str) -> None:
        """
        COMMIT or ROLLBACK the calling task's transaction.

        Raises:
            TransactionError: On COMMIT with no transaction open
        """
        transaction = self.current()
        if transaction is None:
            if verb == COMMIT:
                raise TransactionError("COMMIT issued with no transaction in progress")
            logger.debug("ROLLBACK issued with no transaction in progress; ignored")
            return
        await self.finish(transaction, verb)

    async def finish(self, transaction: Transaction, verb: str) -> None:
        """End ``transaction`` with ``verb`` and release its session."""
        transaction._ensure_active()
        try:
            await self._adapter._control_on(transaction.session, verb)
            transaction.state = (
                TransactionState.COMMITTED if verb == COMMIT else TransactionState.ROLLED_BACK
            )
        except DatabaseError:
            transaction.state = TransactionState.ROLLED_BACK
            if verb == COMMIT:
                await self._abandon(transaction)
            raise
        finally:
            self._forget(transaction)
            await transaction._release()
        logger.debug(f"Transaction {transaction.id} {transaction.state.value}")

    async def _abandon(self, transaction: Transaction) -> None:
        # A failed COMMIT can leave the session inside the transaction
        try:
            await self._adapter._control_on(transaction.session, ROLLBACK)
        except DatabaseError as e:
            logger.warning(f"Rollback after failed commit of {transaction.id} failed: {e.message}")

    def _forget(self, transaction: Transaction) -> None:
        for task, held in list(self._active.items()):
            if held is transaction:
                del self._active[task]

    def _owner_finished(self, transaction: Transaction) -> None:
        # Done callback of the owning task; runs on the event loop
        if not transaction.is_active:
            return
        logger.warning(
            f"Transaction {transaction.id} left open by a finished task; rolling back"
        )
        reclaim = asyncio.ensure_future(self._reclaim(transaction))
        self._reclaiming.add(reclaim)
        reclaim.add_done_callback(self._reclaiming.discard)

    async def _reclaim(self, transaction: Transaction) -> None:
        if not transaction.is_active:
            return
        try:
            await self.finish(transaction, ROLLBACK)
        except DatabaseError as e:
            logger.warning(f"Rollback of abandoned transaction {transaction.id} failed: {e.message}")
