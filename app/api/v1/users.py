# ==============================================================================
# USERS ENDPOINTS - Registration & Login
# ==============================================================================
# Public account routes; admin listing lives in admin.py
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter, status

from app.api.dependencies import UserServiceDep
from app.schemas.user import LoginResponse, UserLogin, UserPublic, UserRegister

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/register",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a customer account. Emails must be unique.",
)
async def register(
    schema: UserRegister,
    service: UserServiceDep,
) -> UserPublic:
    """Register a new customer."""
    user = await service.register(schema)
    return UserPublic(**user)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="User login",
    description="Authenticate with email and password to get an access token.",
)
async def login(
    schema: UserLogin,
    service: UserServiceDep,
) -> LoginResponse:
    """Authenticate user and return token."""
    return LoginResponse(**await service.authenticate(schema.email, schema.password))
