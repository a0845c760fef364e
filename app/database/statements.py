# ==============================================================================
# STATEMENT SHAPES - Structured Single-Table Statements
# ==============================================================================
# Callers describe table, operation, columns and predicate; each engine
# compiles the shape into its own placeholder and RETURNING syntax.
# ==============================================================================

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

from app.database.translator import CompiledStatement, ParamStyle, StatementKind

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
ORDER_TERM = re.compile(r"^(?P<column>[A-Za-z_][A-Za-z0-9_]*)(?:\s+(?P<direction>ASC|DESC))?$", re.IGNORECASE)

SELECT = "select"
INSERT = "insert"
UPDATE = "update"
DELETE = "delete"


def _identifier(name: str) -> str:
    if not IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def _pairs(data: Optional[Mapping[str, Any]]) -> Tuple[Tuple[str, Any], ...]:
    return tuple((_identifier(key), value) for key, value in (data or {}).items())


def _returning(columns: Optional[Sequence[str]]) -> Optional[Tuple[str, ...]]:
    if columns is None:
        return None
    if isinstance(columns, str):
        columns = (columns,)
    return tuple(c if c == "*" else _identifier(c) for c in columns)


@dataclass(frozen=True)
class StatementShape:
    """
    Engine-neutral description of a single-table statement.

    Built through the ``select``/``insert``/``update``/``delete``
    constructors and compiled per engine, so the RETURNING target is
    known structurally rather than recovered from statement text.

    Attributes:
        operation: "select", "insert", "update" or "delete"
        table: Target table
        assignments: (column, value) pairs written by INSERT/UPDATE
        where: (column, value) equality predicates joined with AND;
            a None value compiles to ``IS NULL``
        columns: Projection for SELECT
        order_by: Terms such as ``"created_at DESC"``
        limit: Row limit for SELECT
        returning: Columns to return from a write

    Example:
        >>> shape = StatementShape.update(
        ...     "orders", {"status": "shipped"}, where={"id": order_id},
        ... )
        >>> result = await adapter.run(shape)
        >>> result.affected_count
        1
    """

    operation: str
    table: str
    assignments: Tuple[Tuple[str, Any], ...] = ()
    where: Tuple[Tuple[str, Any], ...] = ()
    columns: Tuple[str, ...] = ("*",)
    order_by: Tuple[str, ...] = ()
    limit: Optional[int] = None
    returning: Optional[Tuple[str, ...]] = None

    # ==========================================================================
    # CONSTRUCTORS
    # ==========================================================================

    @classmethod
    def select(
        cls,
        table: str,
        columns: Sequence[str] = ("*",),
        where: Optional[Mapping[str, Any]] = None,
        order_by: Sequence[str] = (),
        limit: Optional[int] = None,
    ) -> "StatementShape":
        for term in order_by:
            if not ORDER_TERM.match(term.strip()):
                raise ValueError(f"Invalid ORDER BY term: {term!r}")
        return cls(
            operation=SELECT,
            table=_identifier(table),
            where=_pairs(where),
            columns=tuple(c if c == "*" else _identifier(c) for c in columns),
            order_by=tuple(term.strip() for term in order_by),
            limit=limit,
        )

    @classmethod
    def insert(
        cls,
        table: str,
        values: Mapping[str, Any],
        returning: Optional[Sequence[str]] = None,
    ) -> "StatementShape":
        if not values:
            raise ValueError("INSERT requires at least one column")
        return cls(
            operation=INSERT,
            table=_identifier(table),
            assignments=_pairs(values),
            returning=_returning(returning),
        )

    @classmethod
    def update(
        cls,
        table: str,
        values: Mapping[str, Any],
        where: Mapping[str, Any],
        returning: Optional[Sequence[str]] = None,
    ) -> "StatementShape":
        if not values:
            raise ValueError("UPDATE requires at least one column")
        if not where:
            raise ValueError("UPDATE requires a predicate")
        return cls(
            operation=UPDATE,
            table=_identifier(table),
            assignments=_pairs(values),
            where=_pairs(where),
            returning=_returning(returning),
        )

    @classmethod
    def delete(
        cls,
        table: str,
        where: Mapping[str, Any],
    ) -> "StatementShape":
        if not where:
            raise ValueError("DELETE requires a predicate")
        return cls(operation=DELETE, table=_identifier(table), where=_pairs(where))

    # ==========================================================================
    # COMPILATION
    # ==========================================================================

    @property
    def params(self) -> Tuple[Any, ...]:
        """Parameter values in placeholder order."""
        values = tuple(value for _, value in self.assignments)
        values += tuple(value for _, value in self.where if value is not None)
        if self.operation == SELECT and self.limit is not None:
            values += (self.limit,)
        return values

    def compile(self, style: ParamStyle, native_returning: bool) -> CompiledStatement:
        """
        Render the shape for one engine.

        Args:
            style: Placeholder dialect of the engine
            native_returning: Whether the engine executes RETURNING itself

        Returns:
            CompiledStatement whose parameters are ``self.params``
        """
        counter = iter(range(1, len(self.params) + 1))

        def mark() -> str:
            return style.placeholder(next(counter))

        if self.operation == INSERT:
            names = ", ".join(column for column, _ in self.assignments)
            marks = ", ".join(mark() for _ in self.assignments)
            sql = f"INSERT INTO {self.table} ({names}) VALUES ({marks})"
        elif self.operation == UPDATE:
            sets = ", ".join(f"{column} = {mark()}" for column, _ in self.assignments)
            sql = f"UPDATE {self.table} SET {sets}"
        elif self.operation == DELETE:
            sql = f"DELETE FROM {self.table}"
        else:
            sql = f"SELECT {', '.join(self.columns)} FROM {self.table}"

        if self.where:
            terms = [
                f"{column} IS NULL" if value is None else f"{column} = {mark()}"
                for column, value in self.where
            ]
            sql += " WHERE " + " AND ".join(terms)

        if self.operation == SELECT:
            if self.order_by:
                sql += " ORDER BY " + ", ".join(self.order_by)
            if self.limit is not None:
                sql += f" LIMIT {mark()}"
            return CompiledStatement(sql=sql, kind=StatementKind.READ, table=self.table)

        returning = ", ".join(self.returning) if self.returning else None
        if returning and native_returning:
            sql += f" RETURNING {returning}"

        return CompiledStatement(
            sql=sql,
            kind=StatementKind.WRITE,
            returning=returning,
            table=self.table,
            emulate_returning=bool(returning) and not native_returning,
        )
