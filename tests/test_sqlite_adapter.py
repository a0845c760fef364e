# ==============================================================================
# SQLITE ADAPTER TESTS
# ==============================================================================
# Statement execution, result normalization and RETURNING emulation
# ==============================================================================

import logging
import sqlite3
from decimal import Decimal

import pytest
import pytest_asyncio

from app.core.exceptions import DatabaseError, EngineError
from app.database.adapters.sqlite_adapter import SQLiteAdapter, adapt_param
from app.database.statements import StatementShape


@pytest_asyncio.fixture
async def items(adapter: SQLiteAdapter) -> SQLiteAdapter:
    """Adapter with a small ``items`` table."""
    await adapter.execute(
        "CREATE TABLE items (id TEXT PRIMARY KEY, name TEXT NOT NULL UNIQUE, "
        "qty INTEGER NOT NULL DEFAULT 0, price NUMERIC)"
    )
    return adapter


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_connect_and_health(self, adapter: SQLiteAdapter):
        assert adapter.is_connected
        assert await adapter.health_check() is True

    @pytest.mark.asyncio
    async def test_disconnected_adapter(self, tmp_path):
        adapter = SQLiteAdapter(path=str(tmp_path / "nested" / "dir" / "x.db"))
        assert await adapter.health_check() is False
        with pytest.raises(DatabaseError):
            await adapter.execute("SELECT 1")

        await adapter.connect()
        assert (tmp_path / "nested" / "dir" / "x.db").exists()
        await adapter.disconnect()
        assert not adapter.is_connected

    @pytest.mark.asyncio
    async def test_foreign_keys_enabled(self, adapter: SQLiteAdapter):
        result = await adapter.execute("PRAGMA foreign_keys")
        assert result.scalar() == 1


class TestExecution:
    @pytest.mark.asyncio
    async def test_select_returns_row_dicts(self, items: SQLiteAdapter):
        await items.execute("INSERT INTO items (id, name, qty) VALUES ($1, $2, $3)", ["a", "Gauze", 3])

        result = await items.execute("SELECT id, name, qty FROM items WHERE name = $1", ["Gauze"])

        assert result.rows == [{"id": "a", "name": "Gauze", "qty": 3}]
        assert result.last_insert_id is None
        assert result.affected_count is None

    @pytest.mark.asyncio
    async def test_write_reports_id_and_count(self, items: SQLiteAdapter):
        first = await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["a", "Gauze"])
        second = await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["b", "Tape"])

        assert first.rows == []
        assert first.affected_count == 1
        assert second.last_insert_id == first.last_insert_id + 1

        updated = await items.execute("UPDATE items SET qty = $1", [9])
        assert updated.affected_count == 2

    @pytest.mark.asyncio
    async def test_out_of_order_placeholders(self, items: SQLiteAdapter):
        await items.execute(
            "INSERT INTO items (name, id) VALUES ($2, $1)",
            ["id-1", "Suture"],
        )
        row = (await items.execute("SELECT id, name FROM items")).first()
        assert row == {"id": "id-1", "name": "Suture"}

    @pytest.mark.asyncio
    async def test_decimal_params_are_accepted(self, items: SQLiteAdapter):
        await items.execute(
            "INSERT INTO items (id, name, price) VALUES ($1, $2, $3)",
            ["a", "Forceps", Decimal("25.99")],
        )
        price = (await items.execute("SELECT price FROM items")).scalar()
        assert price == pytest.approx(25.99)

    @pytest.mark.asyncio
    async def test_engine_error_keeps_original(self, items: SQLiteAdapter):
        await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["a", "Gauze"])

        with pytest.raises(EngineError) as exc_info:
            await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["b", "Gauze"])

        assert isinstance(exc_info.value.original, sqlite3.IntegrityError)
        assert exc_info.value.__cause__ is exc_info.value.original
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_missing_parameter_never_reaches_engine(self, items: SQLiteAdapter):
        with pytest.raises(EngineError):
            await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["a"])
        assert (await items.execute("SELECT COUNT(*) FROM items")).scalar() == 0

    def test_adapt_param(self):
        assert adapt_param(Decimal("1.50")) == 1.5
        assert adapt_param("x") == "x"
        assert adapt_param(None) is None


class TestReturningEmulation:
    @pytest.mark.asyncio
    async def test_insert_returning_columns(self, items: SQLiteAdapter):
        result = await items.execute(
            "INSERT INTO items (id, name, qty) VALUES ($1, $2, $3) RETURNING id, qty",
            ["a", "Gauze", 4],
        )
        assert result.rows == [{"id": "a", "qty": 4}]

    @pytest.mark.asyncio
    async def test_insert_returning_star_applies_defaults(self, items: SQLiteAdapter):
        result = await items.execute(
            "INSERT INTO items (id, name) VALUES ($1, $2) RETURNING *",
            ["a", "Gauze"],
        )
        assert result.first() == {"id": "a", "name": "Gauze", "qty": 0, "price": None}

    @pytest.mark.asyncio
    async def test_update_of_last_inserted_row(self, items: SQLiteAdapter):
        await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["a", "Gauze"])

        result = await items.execute(
            "UPDATE items SET qty = $1 WHERE id = $2 RETURNING qty",
            [7, "a"],
        )
        assert result.rows == [{"qty": 7}]

    @pytest.mark.asyncio
    async def test_update_matching_nothing_returns_no_rows(self, items: SQLiteAdapter):
        await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["a", "Gauze"])

        result = await items.execute(
            "UPDATE items SET qty = $1 WHERE id = $2 RETURNING *",
            [7, "missing"],
        )
        assert result.rows == []
        assert result.affected_count == 0

    @pytest.mark.asyncio
    async def test_update_after_insert_into_another_table(self, items: SQLiteAdapter):
        await items.execute("CREATE TABLE tags (id TEXT PRIMARY KEY, label TEXT)")
        await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["a", "Gauze"])
        await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["b", "Tape"])
        await items.execute("INSERT INTO tags (id, label) VALUES ($1, $2)", ["t1", "sterile"])

        # last insert rowid is now 1 (tags), while the updated item has rowid 2
        result = await items.execute(
            "UPDATE items SET qty = $1 WHERE id = $2 RETURNING id, qty",
            [9, "b"],
        )

        assert result.rows == [{"id": "b", "qty": 9}]

    @pytest.mark.asyncio
    async def test_bulk_update_returns_every_changed_row(self, items: SQLiteAdapter):
        for key, name in [("a", "Gauze"), ("b", "Tape"), ("c", "Suture")]:
            await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", [key, name])

        result = await items.execute(
            "UPDATE items SET qty = $2 WHERE name <> $1 RETURNING id, qty",
            ["Tape", 3],
        )

        assert result.rows == [{"id": "a", "qty": 3}, {"id": "c", "qty": 3}]
        assert result.affected_count == 2

    @pytest.mark.asyncio
    async def test_update_without_where_returns_all_rows(self, items: SQLiteAdapter):
        await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["a", "Gauze"])
        await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["b", "Tape"])

        result = await items.execute("UPDATE items SET qty = $1 RETURNING id", [1])

        assert result.rows == [{"id": "a"}, {"id": "b"}]

    @pytest.mark.asyncio
    async def test_schema_qualified_insert_returning(self, items: SQLiteAdapter):
        result = await items.execute(
            "INSERT INTO main.items (id, name) VALUES ($1, $2) RETURNING id, name",
            ["a", "Gauze"],
        )
        assert result.rows == [{"id": "a", "name": "Gauze"}]

    @pytest.mark.asyncio
    async def test_unknown_target_degrades_to_empty(self, items: SQLiteAdapter, caplog):
        await items.execute("INSERT INTO items (id, name) VALUES ($1, $2)", ["a", "Gauze"])

        with caplog.at_level(logging.WARNING):
            result = await items.execute("DELETE FROM items WHERE id = $1 RETURNING id", ["a"])

        assert result.rows == []
        assert result.affected_count == 1
        assert "RETURNING" in caplog.text

    @pytest.mark.asyncio
    async def test_shape_insert_returning(self, items: SQLiteAdapter):
        result = await items.run(
            StatementShape.insert("items", {"id": "a", "name": "Gauze"}, returning=["name"])
        )
        assert result.rows == [{"name": "Gauze"}]

    @pytest.mark.asyncio
    async def test_shape_select_and_delete(self, items: SQLiteAdapter):
        await items.run(StatementShape.insert("items", {"id": "a", "name": "Gauze"}))
        await items.run(StatementShape.insert("items", {"id": "b", "name": "Tape"}))

        rows = (await items.run(StatementShape.select("items", ["id"], order_by=["name DESC"]))).rows
        assert [r["id"] for r in rows] == ["b", "a"]

        deleted = await items.run(StatementShape.delete("items", where={"id": "a"}))
        assert deleted.affected_count == 1


class TestProductsTable:
    @pytest.mark.asyncio
    async def test_insert_product_returning_star(self, db: SQLiteAdapter):
        result = await db.execute(
            "INSERT INTO products (id, name, price, stock) VALUES ($1, $2, $3, $4) RETURNING *",
            ["p1", "Scalpel", 10.0, 5],
        )

        assert len(result) == 1
        row = result.first()
        assert row["id"] == "p1"
        assert row["name"] == "Scalpel"
        assert row["price"] == 10.0
        assert row["stock"] == 5
        assert result.last_insert_id is not None

    @pytest.mark.asyncio
    async def test_select_missing_product(self, db: SQLiteAdapter):
        result = await db.execute("SELECT * FROM products WHERE id = $1", ["missing"])
        assert result.rows == []
