# ==============================================================================
# CATALOG SCHEMAS - Categories & Products
# ==============================================================================

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.schemas.base import BaseSchema


class CategoryCreate(BaseSchema):
    """Schema for creating a category."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique category name",
    )
    description: Optional[str] = Field(
        None,
        description="Short description",
    )
    image_url: Optional[str] = Field(
        None,
        max_length=2048,
        description="Banner image URL",
    )


class CategoryUpdate(CategoryCreate):
    """Schema for replacing a category's fields."""


class ProductCreate(BaseSchema):
    """Schema for creating a product."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Product display name",
    )
    description: Optional[str] = Field(
        None,
        description="Detailed product description",
    )
    price: Decimal = Field(
        ...,
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Selling price",
    )
    stock: int = Field(
        0,
        ge=0,
        description="Units available",
    )
    category_id: Optional[str] = Field(
        None,
        description="Owning category",
    )
    image_url: Optional[str] = Field(
        None,
        max_length=2048,
        description="Product image URL",
    )


class ProductUpdate(ProductCreate):
    """Schema for replacing a product's fields."""

    is_active: bool = Field(
        True,
        description="Whether the product is listed in the storefront",
    )
