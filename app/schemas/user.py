# ==============================================================================
# USER SCHEMAS - Registration & Login
# ==============================================================================
# Request/Response schemas for account management
# ==============================================================================

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field

from app.schemas.base import BaseSchema


class UserRegister(BaseSchema):
    """Schema for user registration."""

    full_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Full display name",
    )
    email: EmailStr = Field(
        ...,
        description="User email address",
        examples=["buyer@hospital.org"],
    )
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="User password (min 6 chars)",
    )
    phone: Optional[str] = Field(
        None,
        max_length=50,
        description="Contact phone number",
    )


class UserLogin(BaseSchema):
    """
    Schema for user login request.

    The email is not format-checked: an unknown address is answered
    with the same 401 as a wrong password.
    """

    email: str = Field(
        ...,
        min_length=1,
        description="User email address",
    )
    password: str = Field(
        ...,
        min_length=1,
        description="User password",
    )


class UserPublic(BaseSchema):
    """Newly registered account."""

    id: str
    full_name: str
    email: str


class LoginUser(UserPublic):
    """Account summary returned with a token."""

    role: Optional[str] = None


class LoginResponse(BaseSchema):
    """Schema for authentication token response."""

    token: str = Field(
        ...,
        description="JWT access token",
    )
    user: LoginUser
