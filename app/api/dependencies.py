# ==============================================================================
# API DEPENDENCIES - Dependency Injection
# ==============================================================================
# FastAPI dependencies for database access, services and the admin gate
# ==============================================================================

from __future__ import annotations

from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.constants import ErrorMessages, Roles
from app.core.exceptions import AuthenticationError, AuthorizationError, DatabaseError
from app.core.security import decode_token
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.services.admin_service import AdminService
from app.services.catalog_service import CategoryService, ProductService
from app.services.feedback_service import QuoteService, ReviewService
from app.services.order_service import OrderService
from app.services.user_service import UserService
from app.services.vacancy_service import VacancyService

# Bearer scheme; a missing header is reported by require_admin
bearer_scheme = HTTPBearer(auto_error=False)


# ==============================================================================
# DATABASE DEPENDENCIES
# ==============================================================================

async def get_adapter(request: Request) -> BaseDatabaseAdapter:
    """
    Get database adapter dependency.

    Returns the adapter connected by the application lifespan.
    """
    adapter = getattr(request.app.state, "db", None)
    if adapter is None:
        raise DatabaseError(message="Database is not connected")
    return adapter


# Annotated type for database adapter
DatabaseDep = Annotated[BaseDatabaseAdapter, Depends(get_adapter)]


# ==============================================================================
# AUTHENTICATION DEPENDENCIES
# ==============================================================================

async def require_admin(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> Dict[str, Any]:
    """
    Admin gate for the back-office routes.

    Returns:
        Decoded token claims

    Raises:
        AuthenticationError: If the token is missing
        InvalidTokenError: If the token does not verify
        AuthorizationError: If the caller is not an admin
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message=ErrorMessages.NO_TOKEN)

    claims = decode_token(credentials.credentials)

    if claims.get("role") != Roles.ADMIN:
        raise AuthorizationError(
            message=ErrorMessages.ADMIN_REQUIRED,
            required_role=Roles.ADMIN,
        )
    return claims


AdminClaims = Annotated[Dict[str, Any], Depends(require_admin)]


# ==============================================================================
# SERVICE DEPENDENCIES
# ==============================================================================

async def get_user_service(adapter: DatabaseDep) -> UserService:
    """Get user service instance."""
    return UserService(adapter)


async def get_category_service(adapter: DatabaseDep) -> CategoryService:
    return CategoryService(adapter)


async def get_product_service(adapter: DatabaseDep) -> ProductService:
    return ProductService(adapter)


async def get_order_service(adapter: DatabaseDep) -> OrderService:
    return OrderService(adapter)


async def get_review_service(adapter: DatabaseDep) -> ReviewService:
    return ReviewService(adapter)


async def get_quote_service(adapter: DatabaseDep) -> QuoteService:
    return QuoteService(adapter)


async def get_vacancy_service(adapter: DatabaseDep) -> VacancyService:
    return VacancyService(adapter)


async def get_admin_service(adapter: DatabaseDep) -> AdminService:
    return AdminService(adapter)


# Annotated service types
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
QuoteServiceDep = Annotated[QuoteService, Depends(get_quote_service)]
VacancyServiceDep = Annotated[VacancyService, Depends(get_vacancy_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
