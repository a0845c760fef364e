# ==============================================================================
# USER MODELS - Accounts & Roles
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, String, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domain_models.base import SQLBase, TimestampMixin


class Role(SQLBase):
    """
    Named role. ``admin`` and ``customer`` are seeded with fixed ids.

    Attributes:
        name: Unique role name
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
    )

    users: Mapped[List["User"]] = relationship(back_populates="role")


class User(SQLBase, TimestampMixin):
    """
    Registered account.

    Attributes:
        role_id: Role granting permissions
        full_name: Display name
        email: Unique login email
        password_hash: bcrypt hash
        phone: Contact number
        is_active: Disabled accounts cannot log in

    Relationships:
        role: Assigned role
    """

    __tablename__ = "users"

    role_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("roles.id"),
        nullable=True,
    )
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        server_default=true(),
        nullable=False,
    )

    role: Mapped[Optional[Role]] = relationship(back_populates="users")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
