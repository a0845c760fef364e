# ==============================================================================
# EXECUTION RESULT - Normalized Statement Outcome
# ==============================================================================
# One result shape for both engines: rows + optional insert id / row count
# ==============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ExecutionResult:
    """
    Normalized outcome of one statement.

    ``rows`` is always present (possibly empty). ``last_insert_id`` and
    ``affected_count`` are only populated for non-SELECT statements, and
    only when the engine reports them.

    Attributes:
        rows: Ordered row mappings (column name -> value)
        last_insert_id: Engine-assigned identifier of the last inserted row
        affected_count: Number of rows changed by a write
    """

    rows: List[Dict[str, Any]] = field(default_factory=list)
    last_insert_id: Optional[Any] = None
    affected_count: Optional[int] = None

    def first(self) -> Optional[Dict[str, Any]]:
        """Return the first row, or None when there are no rows."""
        return self.rows[0] if self.rows else None

    def scalar(self, default: Any = None) -> Any:
        """Return the first column of the first row."""
        row = self.first()
        if not row:
            return default
        return next(iter(row.values()))

    def __len__(self) -> int:
        return len(self.rows)
