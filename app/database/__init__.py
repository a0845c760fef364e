# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================
# Dual-engine query abstraction (PostgreSQL / SQLite)
# ==============================================================================

"""
Database Module
===============

Runs the same ``$N`` statements against either engine:
- SQLite (development/testing)
- PostgreSQL (production)

Key Components:
- Translator: placeholder and RETURNING rewriting
- Statements: engine-neutral statement shapes
- Adapters: engine-specific execution
- Transaction: task-scoped transaction handles
- Factory: engine selection from settings
- Setup: idempotent schema and seed initialization
"""

from app.database.factory import create_adapter
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.database.results import ExecutionResult
from app.database.statements import StatementShape
from app.database.transaction import Transaction

__all__ = [
    "create_adapter",
    "BaseDatabaseAdapter",
    "ExecutionResult",
    "StatementShape",
    "Transaction",
]
