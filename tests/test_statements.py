# ==============================================================================
# STATEMENT SHAPE TESTS
# ==============================================================================

import pytest

from app.database.statements import StatementShape
from app.database.translator import ParamStyle


class TestSelect:
    def test_compile_both_styles(self):
        shape = StatementShape.select(
            "orders",
            where={"user_id": "u1"},
            order_by=["created_at DESC"],
            limit=5,
        )

        numeric = shape.compile(ParamStyle.NUMERIC, native_returning=True)
        qmark = shape.compile(ParamStyle.QMARK, native_returning=False)

        assert numeric.sql == (
            "SELECT * FROM orders WHERE user_id = $1 ORDER BY created_at DESC LIMIT $2"
        )
        assert qmark.sql == (
            "SELECT * FROM orders WHERE user_id = ? ORDER BY created_at DESC LIMIT ?"
        )
        assert shape.params == ("u1", 5)
        assert numeric.is_read

    def test_none_compiles_to_is_null(self):
        shape = StatementShape.select("orders", ["id"], where={"user_id": None, "status": "new"})
        compiled = shape.compile(ParamStyle.NUMERIC, native_returning=True)

        assert compiled.sql == "SELECT id FROM orders WHERE user_id IS NULL AND status = $1"
        assert shape.params == ("new",)

    @pytest.mark.parametrize("term", ["name; DROP TABLE users", "name ASC, 1=1", "(name)"])
    def test_rejects_unsafe_order_by(self, term):
        with pytest.raises(ValueError):
            StatementShape.select("products", order_by=[term])

    def test_rejects_unsafe_identifier(self):
        with pytest.raises(ValueError):
            StatementShape.select("products p; --")


class TestWrites:
    def test_insert_native_returning(self):
        shape = StatementShape.insert("roles", {"id": "r1", "name": "admin"}, returning=["id"])
        compiled = shape.compile(ParamStyle.NUMERIC, native_returning=True)

        assert compiled.sql == "INSERT INTO roles (id, name) VALUES ($1, $2) RETURNING id"
        assert compiled.returns_rows
        assert not compiled.emulate_returning

    def test_insert_emulated_returning(self):
        shape = StatementShape.insert("roles", {"id": "r1", "name": "admin"}, returning="*")
        compiled = shape.compile(ParamStyle.QMARK, native_returning=False)

        assert compiled.sql == "INSERT INTO roles (id, name) VALUES (?, ?)"
        assert compiled.returning == "*"
        assert compiled.returning_target() == "roles"
        assert compiled.emulate_returning

    def test_update_params_order(self):
        shape = StatementShape.update(
            "orders", {"status": "shipped", "payment_status": "paid"}, where={"id": "o1"}
        )
        compiled = shape.compile(ParamStyle.NUMERIC, native_returning=True)

        assert compiled.sql == "UPDATE orders SET status = $1, payment_status = $2 WHERE id = $3"
        assert shape.params == ("shipped", "paid", "o1")

    def test_delete(self):
        shape = StatementShape.delete("products", where={"id": "p1"})
        assert shape.compile(ParamStyle.QMARK, False).sql == "DELETE FROM products WHERE id = ?"

    def test_update_and_delete_require_predicate(self):
        with pytest.raises(ValueError):
            StatementShape.update("orders", {"status": "x"}, where={})
        with pytest.raises(ValueError):
            StatementShape.delete("orders", where={})

    def test_shapes_are_immutable(self):
        shape = StatementShape.delete("products", where={"id": "p1"})
        with pytest.raises(AttributeError):
            shape.table = "users"
