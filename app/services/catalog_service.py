# ==============================================================================
# CATALOG SERVICE - Categories & Products
# ==============================================================================
# Storefront browsing and back-office catalog management
# ==============================================================================

from __future__ import annotations

import logging
from typing import List, Optional

from app.core.constants import ErrorMessages
from app.core.exceptions import AlreadyExistsError, EngineError, OperationFailedError
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.schemas.product import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate
from app.services.base_service import BaseService, Row

logger = logging.getLogger(__name__)


class CategoryService(BaseService):
    """Category listing and management."""

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, "categories", ErrorMessages.CATEGORY_NOT_FOUND)

    async def list_categories(self) -> List[Row]:
        """All categories, name ascending."""
        return await self.find_all(order_by=["name ASC"])

    async def _ensure_unique_name(self, name: str, exclude_id: Optional[str] = None) -> None:
        for row in await self.find_all(where={"name": name}):
            if row["id"] != exclude_id:
                raise AlreadyExistsError(
                    message=ErrorMessages.CATEGORY_EXISTS,
                    resource_type="category",
                )

    async def create_category(self, schema: CategoryCreate) -> Row:
        """
        Create a category.

        Raises:
            AlreadyExistsError: If the name is taken
        """
        await self._ensure_unique_name(schema.name)
        return await self.create(schema.model_dump())

    async def update_category(self, category_id: str, schema: CategoryUpdate) -> None:
        """
        Replace a category's fields.

        Raises:
            NotFoundError: If the category does not exist
            AlreadyExistsError: If another category has the name
        """
        await self._ensure_unique_name(schema.name, exclude_id=category_id)
        await self.update(category_id, schema.model_dump())

    async def delete_category(self, category_id: str) -> None:
        """Delete a category; its products become uncategorized."""
        await self.delete(category_id)


class ProductService(BaseService):
    """
    Product catalog operations.

    The storefront sees active products only; the back-office sees
    everything, with the category name joined in.
    """

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, "products", ErrorMessages.PRODUCT_NOT_FOUND)

    async def list_active(self, category_id: Optional[str] = None) -> List[Row]:
        """
        Active products, optionally restricted to one category.

        Args:
            category_id: Category filter
        """
        statement = "SELECT * FROM products WHERE is_active = $1"
        params: list = [True]
        if category_id:
            statement += " AND category_id = $2"
            params.append(category_id)
        statement += " ORDER BY name ASC"
        result = await self._adapter.execute(statement, params)
        return result.rows

    async def list_for_admin(self) -> List[Row]:
        result = await self._adapter.execute(
            "SELECT p.*, c.name AS category_name FROM products p "
            "LEFT JOIN categories c ON p.category_id = c.id "
            "ORDER BY p.created_at DESC"
        )
        return result.rows

    async def create_product(self, schema: ProductCreate) -> Row:
        """
        Create a product and return the stored row.

        Raises:
            OperationFailedError: If the engine rejects the row
        """
        try:
            return await self.create(schema.model_dump())
        except EngineError as e:
            logger.error(f"Product creation failed: {e.message}")
            raise OperationFailedError("Failed to create product") from e

    async def update_product(self, product_id: str, schema: ProductUpdate) -> None:
        """
        Replace a product's fields.

        Raises:
            NotFoundError: If the product does not exist
        """
        result = await self._adapter.execute(
            "UPDATE products SET name = $1, description = $2, price = $3, stock = $4, "
            "category_id = $5, image_url = $6, is_active = $7, "
            "updated_at = CURRENT_TIMESTAMP WHERE id = $8",
            [
                schema.name,
                schema.description,
                schema.price,
                schema.stock,
                schema.category_id,
                schema.image_url,
                schema.is_active,
                product_id,
            ],
        )
        if not result.affected_count:
            raise self._missing(product_id)

    async def delete_product(self, product_id: str) -> None:
        """Delete a product; its reviews go with it."""
        await self.delete(product_id)
