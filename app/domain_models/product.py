# ==============================================================================
# CATALOG MODELS - Categories & Products
# ==============================================================================
# Surgical-equipment catalog entities
# ==============================================================================

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domain_models.base import SQLBase, TimestampMixin


class Category(SQLBase, TimestampMixin):
    """
    Product category (Diagnostic, Surgical, ...).

    Attributes:
        name: Unique category name
        description: Short description
        image_url: Banner image
    """

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    products: Mapped[List["Product"]] = relationship(back_populates="category")


class Product(SQLBase, TimestampMixin):
    """
    Product model for the catalog.

    Attributes:
        category_id: Owning category (cleared when the category is deleted)
        name: Product display name
        description: Detailed product description
        price: Current selling price
        stock: Units available
        image_url: Product image
        is_active: Inactive products are hidden from the storefront

    Relationships:
        category: Owning category
    """

    __tablename__ = "products"

    category_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )
    stock: Mapped[int] = mapped_column(
        Integer,
        server_default="0",
        nullable=False,
    )
    image_url: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        server_default=true(),
        nullable=False,
    )

    category: Mapped[Optional[Category]] = relationship(back_populates="products")

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name})>"
