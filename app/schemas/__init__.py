# ==============================================================================
# SCHEMAS PACKAGE INITIALIZATION
# ==============================================================================

"""
Schemas
=======

Pydantic models for request validation and response serialization.
"""

from app.schemas.base import (
    BaseSchema,
    HealthResponse,
    IdResponse,
    MessageResponse,
    StatusResponse,
)
from app.schemas.user import LoginResponse, LoginUser, UserLogin, UserPublic, UserRegister
from app.schemas.product import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate
from app.schemas.order import OrderCreate, OrderItemCreate, OrderStatusUpdate
from app.schemas.review import QuoteCreate, ReviewCreate

__all__ = [
    "BaseSchema",
    "HealthResponse",
    "IdResponse",
    "MessageResponse",
    "StatusResponse",
    "LoginResponse",
    "LoginUser",
    "UserLogin",
    "UserPublic",
    "UserRegister",
    "CategoryCreate",
    "CategoryUpdate",
    "ProductCreate",
    "ProductUpdate",
    "OrderCreate",
    "OrderItemCreate",
    "OrderStatusUpdate",
    "QuoteCreate",
    "ReviewCreate",
]
