# ==============================================================================
# ORDER SERVICE - Checkout & Fulfilment
# ==============================================================================
# Orders and their line items are written in one transaction
# ==============================================================================

from __future__ import annotations

import logging
from typing import List

from app.core.constants import ErrorMessages, OrderConstants
from app.core.exceptions import DatabaseError, OperationFailedError
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.database.statements import StatementShape
from app.domain_models import new_id
from app.schemas.order import OrderCreate
from app.services.base_service import BaseService, Row

logger = logging.getLogger(__name__)


class OrderService(BaseService):
    """
    Order service.

    ``create_order`` runs inside ``adapter.transaction()``: either the
    order row and every item row are stored, or none are.
    """

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, "orders", ErrorMessages.ORDER_NOT_FOUND)

    async def create_order(self, schema: OrderCreate) -> str:
        """
        Place an order with its line items.

        Args:
            schema: Order with at least one item

        Returns:
            New order ID

        Raises:
            OperationFailedError: If any insert fails; nothing is persisted
        """
        try:
            async with self._adapter.transaction() as tx:
                result = await tx.execute(
                    "INSERT INTO orders (id, user_id, total_amount, shipping_address, "
                    "payment_method) VALUES ($1, $2, $3, $4, $5) RETURNING id",
                    [
                        new_id(),
                        schema.user_id or None,
                        schema.total_amount,
                        schema.shipping_address,
                        schema.payment_method,
                    ],
                )
                order_id = result.scalar()

                for item in schema.items:
                    await tx.run(
                        StatementShape.insert(
                            "order_items",
                            {
                                "id": new_id(),
                                "order_id": order_id,
                                "product_id": item.product_id,
                                "quantity": item.quantity,
                                "price": item.price,
                            },
                        )
                    )
        except DatabaseError as e:
            logger.error(f"Order creation failed: {e.message}")
            raise OperationFailedError(ErrorMessages.ORDER_CREATION_FAILED) from e

        logger.info(f"Order {order_id} placed with {len(schema.items)} item(s)")
        return order_id

    async def list_for_user(self, user_id: str) -> List[Row]:
        """A customer's orders, newest first."""
        return await self.find_all(where={"user_id": user_id}, order_by=["created_at DESC"])

    async def get_with_items(self, order_id: str) -> Row:
        """
        One order with its ``items``.

        Raises:
            NotFoundError: If the order does not exist
        """
        order = await self.get_by_id(order_id)
        result = await self._adapter.execute(
            "SELECT oi.*, p.name AS product_name FROM order_items oi "
            "LEFT JOIN products p ON oi.product_id = p.id WHERE oi.order_id = $1",
            [order_id],
        )
        return {**order, "items": result.rows}

    async def list_for_admin(self) -> List[Row]:
        result = await self._adapter.execute(
            "SELECT o.*, u.full_name, u.email FROM orders o "
            "LEFT JOIN users u ON o.user_id = u.id ORDER BY o.created_at DESC"
        )
        return result.rows

    async def update_status(self, order_id: str, status: str) -> None:
        """
        Move an order to a new status.

        Raises:
            NotFoundError: If the order does not exist
        """
        result = await self._adapter.execute(
            "UPDATE orders SET status = $1, updated_at = CURRENT_TIMESTAMP WHERE id = $2",
            [status, order_id],
        )
        if not result.affected_count:
            raise self._missing(order_id)
        logger.info(f"Order {order_id} moved to {status}")

    async def revenue(self) -> float:
        """Sum of paid order totals."""
        result = await self._adapter.execute(
            "SELECT COALESCE(SUM(total_amount), 0) AS total FROM orders "
            "WHERE payment_status = $1",
            [OrderConstants.PAYMENT_PAID],
        )
        return float(result.scalar(default=0))
