# ==============================================================================
# DATABASE ADAPTERS PACKAGE
# ==============================================================================

"""
Database Adapters
=================

Provides unified interface implementations for the supported engines:
- BaseDatabaseAdapter: Abstract interface definition
- PostgreSQLAdapter: PostgreSQL using an asyncpg pool
- SQLiteAdapter: SQLite using a single aiosqlite connection
"""

from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.database.adapters.postgresql_adapter import PostgreSQLAdapter
from app.database.adapters.sqlite_adapter import SQLiteAdapter

__all__ = [
    "BaseDatabaseAdapter",
    "PostgreSQLAdapter",
    "SQLiteAdapter",
]
