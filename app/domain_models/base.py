# ==============================================================================
# BASE MODEL - SQLAlchemy Foundation
# ==============================================================================
# Base declarative class and common mixins for all table definitions
# Tables are declared once and compiled to DDL for either engine
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, func, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    """Generate a text UUID primary key."""
    return str(uuid4())


class SQLBase(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Provides a common foundation with:
    - Text UUID primary key, generated by the application
    - Type annotations for mapped columns

    Keys are text, so SQLite keeps its implicit ``rowid`` on every table;
    the RETURNING emulation looks rows up through it.

    Example:
        >>> class Category(SQLBase):
        ...     __tablename__ = "categories"
        ...     name: Mapped[str] = mapped_column(String(255))
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )

    def __repr__(self) -> str:
        """Generate readable representation."""
        class_name = self.__class__.__name__
        return f"<{class_name}(id={self.id})>"


class CreatedAtMixin:
    """
    Mixin providing a creation timestamp set by the database.

    Attributes:
        created_at: Timestamp of record creation
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class TimestampMixin(CreatedAtMixin):
    """
    Mixin providing creation and modification timestamps.

    ``updated_at`` starts at insert time; UPDATE statements set it
    explicitly with ``CURRENT_TIMESTAMP``.

    Attributes:
        created_at: Timestamp of record creation
        updated_at: Timestamp of last update
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
