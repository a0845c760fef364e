# ==============================================================================
# ADMIN SERVICE - Dashboard Figures
# ==============================================================================

from __future__ import annotations

import asyncio
from typing import Any, Dict

from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.services.catalog_service import ProductService
from app.services.order_service import OrderService
from app.services.user_service import UserService


class AdminService:
    """
    Back-office dashboard.

    Figures are gathered concurrently; on the embedded engine they still
    run one after another on the single connection.
    """

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        self._products = ProductService(adapter)
        self._users = UserService(adapter)
        self._orders = OrderService(adapter)

    async def stats(self) -> Dict[str, Any]:
        """Counts of products, users and orders plus paid revenue."""
        products, users, orders, revenue = await asyncio.gather(
            self._products.count(),
            self._users.count(),
            self._orders.count(),
            self._orders.revenue(),
        )
        return {
            "products": products,
            "users": users,
            "orders": orders,
            "revenue": revenue,
        }
