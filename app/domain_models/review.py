# ==============================================================================
# REVIEW & QUOTE MODELS - Customer Feedback
# ==============================================================================

from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain_models.base import CreatedAtMixin, SQLBase


class ProductReview(SQLBase, CreatedAtMixin):
    """
    Rating and comment left by a user on a product.

    Attributes:
        product_id: Reviewed product (reviews go with it)
        user_id: Reviewer (reviews go with the account)
        rating: 1 to 5
        comment: Free text
    """

    __tablename__ = "product_reviews"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_product_reviews_rating_range"),
    )

    product_id: Mapped[str] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Quote(SQLBase, CreatedAtMixin):
    """
    Request for a bulk or custom price quotation.

    Attributes:
        user_id: Requesting account, if signed in
        message: Request details
        status: ``new`` until handled
    """

    __tablename__ = "quotes"

    user_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(50),
        server_default="new",
        nullable=False,
    )
