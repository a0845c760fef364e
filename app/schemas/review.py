# ==============================================================================
# FEEDBACK SCHEMAS - Reviews & Quotes
# ==============================================================================

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.schemas.base import BaseSchema


class ReviewCreate(BaseSchema):
    """Schema for reviewing a product."""

    product_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    rating: int = Field(
        ...,
        ge=1,
        le=5,
        description="Star rating, 1 to 5",
    )
    comment: Optional[str] = Field(None, max_length=5000)


class QuoteCreate(BaseSchema):
    """Schema for requesting a quotation."""

    message: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="What the customer needs",
    )
    user_id: Optional[str] = Field(
        None,
        description="Requesting account, if signed in",
    )
