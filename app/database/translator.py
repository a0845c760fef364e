# ==============================================================================
# STATEMENT TRANSLATOR - Placeholder & RETURNING Dialect Rewriting
# ==============================================================================
# Call sites write `$1, $2, ...` uniformly. PostgreSQL takes that verbatim;
# SQLite needs positional `?` and has its RETURNING clause emulated.
# ==============================================================================

"""
Statement translation.

``translate(statement, style)`` is a pure string transform. It never
touches a connection and never inspects parameter values beyond binding
them in the order the placeholders appear.

Example:
    >>> compiled = translate(
    ...     "INSERT INTO orders (id, total_amount) VALUES ($1, $2) RETURNING id",
    ...     ParamStyle.QMARK,
    ... )
    >>> compiled.sql
    'INSERT INTO orders (id, total_amount) VALUES (?, ?)'
    >>> compiled.returning, compiled.table
    ('id', 'orders')
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from app.core.exceptions import EngineError, TranslationAmbiguity


# ==============================================================================
# PATTERNS
# ==============================================================================

NUMERIC_PLACEHOLDER = re.compile(r"\$(\d+)")

RETURNING_CLAUSE = re.compile(
    r"\s+RETURNING\s+(?P<columns>.+?)\s*;?\s*$",
    re.IGNORECASE | re.DOTALL,
)

TARGET_TABLE = re.compile(
    r"^\s*(?P<verb>INSERT\s+(?:OR\s+\w+\s+)?INTO|UPDATE\s+(?:OR\s+\w+\s+)?)"
    r"\s*(?:[\"`]?(?P<schema>[A-Za-z_][A-Za-z0-9_]*)[\"`]?\s*\.\s*)?"
    r"[\"`]?(?P<table>[A-Za-z_][A-Za-z0-9_]*)[\"`]?",
    re.IGNORECASE,
)

WHERE_KEYWORD = re.compile(r"\bWHERE\b", re.IGNORECASE)

LEADING_KEYWORD = re.compile(r"^\s*\(?\s*(?P<keyword>[A-Za-z]+)")

READ_KEYWORDS = frozenset({"SELECT", "WITH", "PRAGMA", "EXPLAIN", "VALUES"})


class ParamStyle(str, Enum):
    """
    Placeholder dialect accepted by an engine.

    Attributes:
        NUMERIC: ``$1, $2, ...`` (PostgreSQL)
        QMARK: positional ``?`` (SQLite)
    """
    NUMERIC = "numeric"
    QMARK = "qmark"

    def placeholder(self, index: int) -> str:
        """Render the placeholder for the 1-based parameter ``index``."""
        if self is ParamStyle.NUMERIC:
            return f"${index}"
        return "?"


class StatementKind(str, Enum):
    """Coarse classification used to pick an engine's read or write path."""
    READ = "read"
    WRITE = "write"


@dataclass(frozen=True)
class CompiledStatement:
    """
    A statement ready for one specific engine.

    Attributes:
        sql: Text sent to the engine
        kind: READ statements produce rows; WRITE statements report id/count
        param_order: 1-based parameter indices in placeholder order, or None
            to bind the parameter list as given
        returning: Column list of a RETURNING clause, if the caller asked for one
        table: Target table of an INSERT/UPDATE, when it could be parsed
        emulate_returning: True when the engine must re-fetch the RETURNING rows
    """

    sql: str
    kind: StatementKind
    param_order: Optional[Tuple[int, ...]] = None
    returning: Optional[str] = None
    table: Optional[str] = None
    emulate_returning: bool = False

    @property
    def is_read(self) -> bool:
        return self.kind is StatementKind.READ

    @property
    def returns_rows(self) -> bool:
        """True when the engine itself produces rows for this statement."""
        return self.is_read or (self.returning is not None and not self.emulate_returning)

    def returning_target(self) -> str:
        """
        Table a RETURNING clause reads back from.

        Raises:
            TranslationAmbiguity: If no INSERT/UPDATE target was parsed
        """
        if not self.table:
            raise TranslationAmbiguity(statement=self.sql)
        return self.table

    def bind(self, params: Optional[Sequence[Any]]) -> Tuple[Any, ...]:
        """
        Arrange ``params`` in the order the engine will consume them.

        Raises:
            EngineError: If the statement references more parameters than
                were supplied, or fewer parameters than were supplied
        """
        values = tuple(params or ())
        if self.param_order is None:
            return values

        highest = max(self.param_order, default=0)
        if highest != len(values):
            raise EngineError(
                message=(
                    f"Statement references {highest} parameter(s) "
                    f"but {len(values)} were supplied"
                ),
                statement=self.sql,
            )
        return tuple(values[index - 1] for index in self.param_order)


# ==============================================================================
# TRANSLATION
# ==============================================================================

def statement_kind(statement: str) -> StatementKind:
    """Classify a statement by its leading keyword."""
    match = LEADING_KEYWORD.match(statement)
    if match and match.group("keyword").upper() in READ_KEYWORDS:
        return StatementKind.READ
    return StatementKind.WRITE


def target_table(statement: str) -> Optional[str]:
    """
    Parse the table named by a leading ``INSERT INTO`` or ``UPDATE``.

    A schema-qualified target keeps its qualifier (``main.products``).
    """
    match = TARGET_TABLE.match(statement)
    if not match:
        return None
    if match.group("schema"):
        return f"{match.group('schema')}.{match.group('table')}"
    return match.group("table")


def is_update(statement: str) -> bool:
    match = TARGET_TABLE.match(statement)
    return bool(match) and match.group("verb").upper().startswith("UPDATE")


def where_predicate(statement: str) -> Optional[str]:
    """
    Text after the first ``WHERE`` keyword of a statement, or None.

    Only meant for the single-table statements the adapters handle; a
    ``WHERE`` inside a subquery of the SET list is not told apart.
    """
    match = WHERE_KEYWORD.search(statement)
    if not match:
        return None
    return statement[match.end():].strip() or None


def split_returning(statement: str) -> Tuple[str, Optional[str]]:
    """
    Separate a trailing RETURNING clause from a statement.

    Returns:
        (statement without the clause, column list or None)
    """
    match = RETURNING_CLAUSE.search(statement)
    if not match:
        return statement, None
    return statement[:match.start()], match.group("columns").strip()


def translate(statement: str, style: ParamStyle) -> CompiledStatement:
    """
    Rewrite a ``$N`` statement for an engine's placeholder dialect.

    NUMERIC engines get the statement unchanged and handle RETURNING
    natively. QMARK engines get every ``$N`` replaced by ``?`` left to
    right, with the index sequence recorded so parameters bind by number;
    a trailing RETURNING clause is stripped and flagged for emulation.
    Statements already written with ``?`` pass through with their
    parameters bound as given.

    Args:
        statement: Statement text in ``$N`` dialect
        style: Placeholder dialect of the target engine

    Returns:
        CompiledStatement for the engine
    """
    kind = statement_kind(statement)

    if style is ParamStyle.NUMERIC:
        _, returning = split_returning(statement)
        return CompiledStatement(
            sql=statement,
            kind=kind,
            returning=returning if kind is StatementKind.WRITE else None,
            table=target_table(statement),
        )

    order = tuple(int(index) for index in NUMERIC_PLACEHOLDER.findall(statement))
    sql = NUMERIC_PLACEHOLDER.sub("?", statement) if order else statement

    returning = None
    if kind is StatementKind.WRITE:
        sql, returning = split_returning(sql)

    return CompiledStatement(
        sql=sql,
        kind=kind,
        param_order=order or None,
        returning=returning,
        table=target_table(sql),
        emulate_returning=returning is not None,
    )
