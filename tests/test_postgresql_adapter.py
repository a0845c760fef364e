# ==============================================================================
# POSTGRESQL ADAPTER TESTS
# ==============================================================================
# Integration tests run only when TEST_DATABASE_URL points at a server
# ==============================================================================

import os
import ssl
from uuid import uuid4

import pytest
import pytest_asyncio

from app.core.exceptions import EngineError, TransactionError
from app.core.settings import DatabaseType, settings
from app.database.adapters.postgresql_adapter import (
    PostgreSQLAdapter,
    parse_command_tag,
    relaxed_ssl_context,
)
from app.database.factory import create_adapter
from app.database.adapters.sqlite_adapter import SQLiteAdapter
from app.database.translator import ParamStyle

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")

requires_postgres = pytest.mark.skipif(
    not TEST_DATABASE_URL,
    reason="TEST_DATABASE_URL not set",
)


@pytest.mark.parametrize(
    "status, count",
    [
        ("INSERT 0 1", 1),
        ("UPDATE 3", 3),
        ("DELETE 0", 0),
        ("CREATE TABLE", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_command_tag(status, count):
    assert parse_command_tag(status) == count


def test_relaxed_ssl_context():
    context = relaxed_ssl_context()
    assert context.verify_mode == ssl.CERT_NONE
    assert context.check_hostname is False


class TestFactory:
    def test_database_url_selects_postgresql(self):
        config = settings.model_copy(update={"DATABASE_URL": "postgresql://db.internal/hub"})
        adapter = create_adapter(config)

        assert config.database_type is DatabaseType.POSTGRESQL
        assert isinstance(adapter, PostgreSQLAdapter)
        assert adapter.paramstyle is ParamStyle.NUMERIC
        assert adapter.native_returning is True
        assert not adapter.is_connected

    def test_no_database_url_selects_sqlite(self):
        config = settings.model_copy(update={"DATABASE_URL": None})
        adapter = create_adapter(config)

        assert isinstance(adapter, SQLiteAdapter)
        assert adapter.paramstyle is ParamStyle.QMARK
        assert adapter.path == settings.SQLITE_PATH


@pytest_asyncio.fixture
async def pg():
    adapter = PostgreSQLAdapter(dsn=TEST_DATABASE_URL, min_size=1, max_size=4)
    await adapter.connect()
    table = f"pg_items_{uuid4().hex[:8]}"
    await adapter.execute(
        f"CREATE TABLE {table} (id TEXT PRIMARY KEY, qty INTEGER NOT NULL CHECK (qty > 0))"
    )
    yield adapter, table
    await adapter.execute(f"DROP TABLE IF EXISTS {table}")
    await adapter.disconnect()


@requires_postgres
class TestPostgreSQLIntegration:
    @pytest.mark.asyncio
    async def test_native_returning(self, pg):
        adapter, table = pg
        result = await adapter.execute(
            f"INSERT INTO {table} (id, qty) VALUES ($1, $2) RETURNING id, qty",
            ["a", 2],
        )
        assert result.rows == [{"id": "a", "qty": 2}]
        assert result.affected_count == 1

    @pytest.mark.asyncio
    async def test_affected_count_from_command_tag(self, pg):
        adapter, table = pg
        await adapter.execute(f"INSERT INTO {table} (id, qty) VALUES ($1, $2)", ["a", 2])
        await adapter.execute(f"INSERT INTO {table} (id, qty) VALUES ($1, $2)", ["b", 2])

        result = await adapter.execute(f"UPDATE {table} SET qty = $1", [5])
        assert result.affected_count == 2

    @pytest.mark.asyncio
    async def test_transaction_pins_one_connection(self, pg):
        adapter, table = pg
        with pytest.raises(EngineError):
            async with adapter.transaction() as tx:
                await tx.execute(f"INSERT INTO {table} (id, qty) VALUES ($1, $2)", ["a", 1])
                await adapter.execute(f"INSERT INTO {table} (id, qty) VALUES ($1, $2)", ["b", 0])

        count = await adapter.execute(f"SELECT COUNT(*) FROM {table}")
        assert count.scalar() == 0

    @pytest.mark.asyncio
    async def test_literal_control_statements(self, pg):
        adapter, table = pg
        await adapter.execute("BEGIN")
        await adapter.execute(f"INSERT INTO {table} (id, qty) VALUES ($1, $2)", ["a", 1])
        await adapter.execute("COMMIT")

        with pytest.raises(TransactionError):
            await adapter.execute("COMMIT")
        assert (await adapter.execute(f"SELECT COUNT(*) FROM {table}")).scalar() == 1
