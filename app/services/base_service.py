# ==============================================================================
# BASE SERVICE - Generic Business Logic Layer
# ==============================================================================
# Single-table operations shared by the domain services
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from app.core.exceptions import NotFoundError
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.database.statements import StatementShape
from app.domain_models import new_id

Row = Dict[str, Any]


class BaseService:
    """
    Base service providing standard single-table operations.

    Encapsulates database access for one table behind a small interface
    for API endpoints. Statements are built as ``StatementShape`` values,
    so they run unchanged on either engine.

    Attributes:
        _adapter: Database adapter for operations
        _table: Table name
        _not_found: Message raised when a row is missing

    Example:
        >>> class CategoryService(BaseService):
        ...     def __init__(self, adapter):
        ...         super().__init__(adapter, "categories", "Category not found")
    """

    def __init__(
        self,
        adapter: BaseDatabaseAdapter,
        table: str,
        not_found: str = "Resource not found",
    ) -> None:
        """
        Initialize service.

        Args:
            adapter: Database adapter instance
            table: Table name
            not_found: Message for NotFoundError
        """
        self._adapter = adapter
        self._table = table
        self._not_found = not_found

    def _missing(self, id: Any) -> NotFoundError:
        return NotFoundError(
            message=self._not_found,
            resource_type=self._table,
            resource_id=id,
        )

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def get_by_id(self, id: str) -> Row:
        """
        Retrieve a row by ID.

        Raises:
            NotFoundError: If the row does not exist
        """
        result = await self._adapter.run(
            StatementShape.select(self._table, where={"id": id})
        )
        row = result.first()
        if row is None:
            raise self._missing(id)
        return row

    async def find_all(
        self,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Sequence[str] = (),
        limit: Optional[int] = None,
    ) -> List[Row]:
        """Retrieve rows matching equality filters."""
        result = await self._adapter.run(
            StatementShape.select(self._table, where=where, order_by=order_by, limit=limit)
        )
        return result.rows

    async def create(self, values: Mapping[str, Any]) -> Row:
        """
        Insert a row with a fresh ID and return it as stored.

        Returns:
            Created row (all columns, defaults applied)
        """
        data = {"id": new_id(), **values}
        result = await self._adapter.run(
            StatementShape.insert(self._table, data, returning=["*"])
        )
        return result.first() or data

    async def update(self, id: str, values: Mapping[str, Any]) -> int:
        """
        Update columns of one row.

        Raises:
            NotFoundError: If no row has this ID
        """
        result = await self._adapter.run(
            StatementShape.update(self._table, values, where={"id": id})
        )
        if not result.affected_count:
            raise self._missing(id)
        return result.affected_count

    async def delete(self, id: str) -> None:
        """
        Delete one row.

        Raises:
            NotFoundError: If no row has this ID
        """
        result = await self._adapter.run(
            StatementShape.delete(self._table, where={"id": id})
        )
        if not result.affected_count:
            raise self._missing(id)

    async def count(self) -> int:
        result = await self._adapter.execute(f"SELECT COUNT(*) AS count FROM {self._table}")
        return int(result.scalar(default=0))
