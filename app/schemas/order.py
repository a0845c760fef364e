# ==============================================================================
# ORDER SCHEMAS - E-commerce Orders
# ==============================================================================

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.core.constants import OrderConstants
from app.schemas.base import BaseSchema


class OrderItemCreate(BaseSchema):
    """Schema for an order line item."""

    product_id: str = Field(
        ...,
        min_length=1,
        description="Ordered product",
    )
    quantity: int = Field(
        ...,
        gt=0,
        description="Number of units",
    )
    price: Decimal = Field(
        ...,
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Unit price at time of order",
    )


class OrderCreate(BaseSchema):
    """Schema for placing an order."""

    user_id: Optional[str] = Field(
        None,
        description="Customer placing the order; omitted for guest checkout",
    )
    total_amount: Decimal = Field(
        ...,
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Order total",
    )
    shipping_address: Optional[str] = Field(
        None,
        description="Delivery address",
    )
    payment_method: Optional[str] = Field(
        OrderConstants.DEFAULT_PAYMENT_METHOD,
        max_length=50,
        description="Payment method",
    )
    items: List[OrderItemCreate] = Field(
        ...,
        min_length=1,
        description="Line items",
    )


class OrderStatusUpdate(BaseSchema):
    """Schema for moving an order through fulfilment."""

    status: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="New order status",
        examples=[OrderConstants.STATUS_SHIPPED],
    )
