# ==============================================================================
# ORDERS ENDPOINTS - Checkout
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, status

from app.api.dependencies import OrderServiceDep
from app.schemas.base import IdResponse
from app.schemas.order import OrderCreate

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place order",
    description="Store an order and its items atomically.",
)
async def create_order(
    schema: OrderCreate,
    service: OrderServiceDep,
) -> IdResponse:
    """Place an order."""
    order_id = await service.create_order(schema)
    return IdResponse(id=order_id)


@router.get(
    "/user/{user_id}",
    summary="List user orders",
    description="A customer's orders, newest first.",
)
async def list_user_orders(user_id: str, service: OrderServiceDep) -> List[Dict[str, Any]]:
    return await service.list_for_user(user_id)


@router.get(
    "/{order_id}",
    summary="Get order",
    description="One order with its line items.",
)
async def get_order(order_id: str, service: OrderServiceDep) -> Dict[str, Any]:
    return await service.get_with_items(order_id)
