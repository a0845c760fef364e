# ==============================================================================
# DATABASE FACTORY - Adapter Instantiation
# ==============================================================================
# Engine selection happens once, here, from explicit settings
# The caller owns the returned adapter's lifecycle
# ==============================================================================

from __future__ import annotations

import logging

from app.core.settings import DatabaseType, Settings
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.database.adapters.postgresql_adapter import PostgreSQLAdapter
from app.database.adapters.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


def create_adapter(settings: Settings) -> BaseDatabaseAdapter:
    """
    Create the database adapter implied by ``settings``.

    A configured ``DATABASE_URL`` selects PostgreSQL; otherwise the
    SQLite file at ``SQLITE_PATH`` is used. The adapter is returned
    unconnected: the application lifespan (or a test fixture) connects
    it, keeps it for the process lifetime and disconnects it on exit.

    Args:
        settings: Application settings

    Returns:
        Database adapter instance

    Example:
        >>> adapter = create_adapter(get_settings())
        >>> await adapter.connect()
        >>> ...
        >>> await adapter.disconnect()
    """
    adapter: BaseDatabaseAdapter

    if settings.database_type == DatabaseType.POSTGRESQL:
        adapter = PostgreSQLAdapter(
            dsn=settings.DATABASE_URL,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            ssl_required=settings.DB_SSL,
        )
        logger.info("Created PostgreSQL adapter")
    else:
        adapter = SQLiteAdapter(path=settings.SQLITE_PATH)
        logger.info(f"Created SQLite adapter ({settings.SQLITE_PATH})")

    return adapter
