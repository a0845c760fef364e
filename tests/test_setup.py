# ==============================================================================
# SCHEMA & SEED INITIALIZER TESTS
# ==============================================================================

import pytest

from app.core.constants import Roles
from app.core.security import verify_password
from app.core.settings import DatabaseType, settings
from app.database.adapters.sqlite_adapter import SQLiteAdapter
from app.database.setup import (
    ADDITIVE_COLUMNS,
    SEED_CATEGORIES,
    SEED_PRODUCTS,
    SEED_VACANCIES,
    DatabaseInitializer,
    add_column_statement,
    schema_statements,
    setup_database,
)

TABLES = [
    "roles",
    "users",
    "categories",
    "products",
    "orders",
    "order_items",
    "product_reviews",
    "quotes",
    "careers",
    "vacancies",
]


async def table_count(adapter: SQLiteAdapter, table: str) -> int:
    return (await adapter.execute(f"SELECT COUNT(*) AS n FROM {table}")).scalar()


class TestDDL:
    @pytest.mark.parametrize("database_type", [DatabaseType.SQLITE, DatabaseType.POSTGRESQL])
    def test_every_table_is_created_if_absent(self, database_type):
        statements = schema_statements(database_type)
        creates = [s for s in statements if s.startswith("CREATE TABLE")]

        assert len(creates) == len(TABLES)
        assert all("IF NOT EXISTS" in s for s in statements)
        for table in TABLES:
            assert any(f"CREATE TABLE IF NOT EXISTS {table} " in s for s in creates)

    def test_tables_created_after_their_references(self):
        order = [
            s.split()[5]
            for s in schema_statements(DatabaseType.SQLITE)
            if s.startswith("CREATE TABLE")
        ]
        assert order.index("roles") < order.index("users")
        assert order.index("users") < order.index("orders")
        assert order.index("orders") < order.index("order_items")

    def test_add_column_per_engine(self):
        pg = add_column_statement(DatabaseType.POSTGRESQL, "orders", "payment_status")
        lite = add_column_statement(DatabaseType.SQLITE, "orders", "payment_status")

        assert pg.startswith("ALTER TABLE orders ADD COLUMN IF NOT EXISTS payment_status")
        assert lite.startswith("ALTER TABLE orders ADD COLUMN payment_status")
        assert "IF NOT EXISTS" not in lite


class TestInitializer:
    @pytest.mark.asyncio
    async def test_fresh_database_is_seeded(self, adapter: SQLiteAdapter):
        assert await setup_database(adapter, settings) is True

        assert await table_count(adapter, "roles") == 2
        assert await table_count(adapter, "categories") == len(SEED_CATEGORIES)
        assert await table_count(adapter, "products") == len(SEED_PRODUCTS)
        assert await table_count(adapter, "vacancies") == len(SEED_VACANCIES)

    @pytest.mark.asyncio
    async def test_roles_have_fixed_ids(self, db: SQLiteAdapter):
        rows = (await db.execute("SELECT id, name FROM roles ORDER BY name")).rows
        assert [(r["id"], r["name"]) for r in rows] == [
            (Roles.ADMIN_ID, Roles.ADMIN),
            (Roles.CUSTOMER_ID, Roles.CUSTOMER),
        ]

    @pytest.mark.asyncio
    async def test_admin_account_seeded(self, db: SQLiteAdapter):
        admin = (
            await db.execute(
                "SELECT u.password_hash, r.name AS role FROM users u "
                "JOIN roles r ON u.role_id = r.id WHERE u.email = $1",
                [settings.ADMIN_EMAIL],
            )
        ).first()

        assert admin["role"] == Roles.ADMIN
        assert verify_password(settings.ADMIN_PASSWORD, admin["password_hash"])

    @pytest.mark.asyncio
    async def test_products_linked_to_categories(self, db: SQLiteAdapter):
        orphans = await db.execute("SELECT id FROM products WHERE category_id IS NULL")
        assert orphans.rows == []

    @pytest.mark.asyncio
    async def test_rerun_is_idempotent(self, db: SQLiteAdapter):
        before = {t: await table_count(db, t) for t in TABLES}

        assert await setup_database(db, settings) is True

        after = {t: await table_count(db, t) for t in TABLES}
        assert after == before

    @pytest.mark.asyncio
    async def test_existing_rows_block_reseeding(self, db: SQLiteAdapter):
        await db.execute("DELETE FROM products WHERE name = $1", ["Bone Saw"])

        await setup_database(db, settings)

        assert await table_count(db, "products") == len(SEED_PRODUCTS) - 1

    @pytest.mark.asyncio
    async def test_older_schema_gains_new_columns(self, adapter: SQLiteAdapter):
        await adapter.execute("CREATE TABLE roles (id VARCHAR(36) PRIMARY KEY, name VARCHAR(50))")
        await adapter.execute(
            "CREATE TABLE users (id VARCHAR(36) PRIMARY KEY, role_id VARCHAR(36), "
            "full_name VARCHAR(255), email VARCHAR(255) UNIQUE, password_hash VARCHAR(255), "
            "created_at DATETIME DEFAULT CURRENT_TIMESTAMP, "
            "updated_at DATETIME DEFAULT CURRENT_TIMESTAMP)"
        )

        assert await setup_database(adapter, settings) is True

        columns = {
            row["name"] for row in (await adapter.execute("PRAGMA table_info(users)")).rows
        }
        assert {"phone", "is_active"} <= columns

    @pytest.mark.asyncio
    async def test_failed_step_is_logged_and_skipped(self, db: SQLiteAdapter, caplog):
        initializer = DatabaseInitializer(db, settings)

        async def broken() -> None:
            await db.execute("SELECT * FROM no_such_table")

        initializer.seed_careers = broken

        assert await initializer.initialize() is False
        assert "seed_careers" in caplog.text

    @pytest.mark.asyncio
    async def test_unhashable_admin_password_is_not_fatal(self, adapter: SQLiteAdapter, caplog):
        config = settings.model_copy(update={"ADMIN_PASSWORD": "bad\x00pass"})

        assert await setup_database(adapter, config) is False

        assert "ensure_admin" in caplog.text
        assert await table_count(adapter, "users") == 0
        assert await table_count(adapter, "roles") == 2
        assert await table_count(adapter, "products") == len(SEED_PRODUCTS)

    @pytest.mark.asyncio
    async def test_non_database_failure_is_logged_and_skipped(self, db: SQLiteAdapter, caplog):
        initializer = DatabaseInitializer(db, settings)

        async def broken() -> None:
            raise RuntimeError("catalog file unreadable")

        initializer.seed_catalog = broken

        assert await initializer.initialize() is False
        assert "seed_catalog" in caplog.text
        assert "catalog file unreadable" in caplog.text

    def test_seed_switch(self):
        config = settings.model_copy(update={"SEED_CATALOG": False})
        names = [name for name, _ in DatabaseInitializer(None, config).steps()]

        assert names == ["create_schema", "evolve_schema", "ensure_roles", "ensure_admin"]

    def test_additive_columns_are_declared(self):
        for table, column in ADDITIVE_COLUMNS:
            assert add_column_statement(DatabaseType.SQLITE, table, column)
