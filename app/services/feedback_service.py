# ==============================================================================
# FEEDBACK SERVICE - Reviews & Quote Requests
# ==============================================================================

from __future__ import annotations

import logging
from typing import List

from app.core.exceptions import EngineError, OperationFailedError
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.domain_models import new_id
from app.schemas.review import QuoteCreate, ReviewCreate
from app.services.base_service import BaseService, Row

logger = logging.getLogger(__name__)


class ReviewService(BaseService):
    """Product reviews, shown with the reviewer's name."""

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, "product_reviews", "Review not found")

    async def list_for_product(self, product_id: str) -> List[Row]:
        """Reviews of one product, newest first."""
        result = await self._adapter.execute(
            "SELECT r.*, u.full_name FROM product_reviews r "
            "JOIN users u ON r.user_id = u.id WHERE r.product_id = $1 "
            "ORDER BY r.created_at DESC",
            [product_id],
        )
        return result.rows

    async def add_review(self, schema: ReviewCreate) -> Row:
        """
        Store a review and return the stored row.

        Raises:
            OperationFailedError: If the product or user does not exist
        """
        try:
            result = await self._adapter.execute(
                "INSERT INTO product_reviews (id, product_id, user_id, rating, comment) "
                "VALUES ($1, $2, $3, $4, $5) RETURNING *",
                [new_id(), schema.product_id, schema.user_id, schema.rating, schema.comment],
            )
        except EngineError as e:
            logger.error(f"Review rejected: {e.message}")
            raise OperationFailedError("Failed to add review") from e
        return result.first()


class QuoteService(BaseService):
    """Quotation requests."""

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, "quotes", "Quote not found")

    async def submit(self, schema: QuoteCreate) -> str:
        """
        Record a quotation request.

        Returns:
            New quote ID
        """
        try:
            row = await self.create({"user_id": schema.user_id or None, "message": schema.message})
        except EngineError as e:
            logger.error(f"Quote rejected: {e.message}")
            raise OperationFailedError("Failed to submit quote") from e
        return row["id"]
