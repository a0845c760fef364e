# ==============================================================================
# ORDER MODELS - E-commerce Orders
# ==============================================================================
# Order and OrderItem entities; an order and its items are written atomically
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import OrderConstants
from app.domain_models.base import CreatedAtMixin, SQLBase


class Order(SQLBase, CreatedAtMixin):
    """
    Order model representing a customer purchase.

    Attributes:
        user_id: Customer who placed the order (None for guest checkout)
        total_amount: Order total
        status: Fulfilment status, ``pending`` on creation
        shipping_address: Free-text delivery address
        payment_method: e.g. ``cod``, ``card``
        payment_status: ``unpaid`` until settled; revenue counts ``paid`` only

    Relationships:
        items: Line items in the order
    """

    __tablename__ = "orders"

    user_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(50),
        server_default=OrderConstants.STATUS_PENDING,
        nullable=False,
    )
    shipping_address: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    payment_method: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    payment_status: Mapped[str] = mapped_column(
        String(50),
        server_default=OrderConstants.PAYMENT_UNPAID,
        nullable=False,
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=True,
    )

    items: Mapped[List["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status={self.status})>"


class OrderItem(SQLBase):
    """
    Order line item linking orders to products.

    Stores quantity and the unit price at time of order.

    Attributes:
        order_id: Parent order
        product_id: Ordered product (cleared if the product is deleted)
        quantity: Number of units, always positive
        price: Unit price at time of order
    """

    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )

    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    product_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
    )
    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )

    order: Mapped[Order] = relationship(back_populates="items")
