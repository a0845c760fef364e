# ==============================================================================
# ADMIN ENDPOINTS - Back Office
# ==============================================================================
# Every route requires a bearer token with the admin role
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from app.api.dependencies import (
    AdminServiceDep,
    CategoryServiceDep,
    OrderServiceDep,
    ProductServiceDep,
    UserServiceDep,
    require_admin,
)
from app.core.constants import SuccessMessages
from app.schemas.base import MessageResponse
from app.schemas.order import OrderStatusUpdate
from app.schemas.product import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


@router.get(
    "/stats",
    summary="Dashboard figures",
    description="Product, user and order counts plus paid revenue.",
)
async def stats(service: AdminServiceDep) -> Dict[str, Any]:
    return await service.stats()


# ==============================================================================
# PRODUCTS
# ==============================================================================

@router.get("/products", summary="List all products")
async def list_products(service: ProductServiceDep) -> List[Dict[str, Any]]:
    """All products with category names, newest first."""
    return await service.list_for_admin()


@router.post(
    "/products",
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(schema: ProductCreate, service: ProductServiceDep) -> Dict[str, Any]:
    return await service.create_product(schema)


@router.put(
    "/products/{product_id}",
    response_model=MessageResponse,
    summary="Update product",
)
async def update_product(
    product_id: str,
    schema: ProductUpdate,
    service: ProductServiceDep,
) -> MessageResponse:
    await service.update_product(product_id, schema)
    return MessageResponse(message=SuccessMessages.PRODUCT_UPDATED)


@router.delete(
    "/products/{product_id}",
    response_model=MessageResponse,
    summary="Delete product",
)
async def delete_product(product_id: str, service: ProductServiceDep) -> MessageResponse:
    await service.delete_product(product_id)
    return MessageResponse(message=SuccessMessages.PRODUCT_DELETED)


# ==============================================================================
# ORDERS
# ==============================================================================

@router.get("/orders", summary="List all orders")
async def list_orders(service: OrderServiceDep) -> List[Dict[str, Any]]:
    """All orders with customer name and email, newest first."""
    return await service.list_for_admin()


@router.put(
    "/orders/{order_id}/status",
    response_model=MessageResponse,
    summary="Update order status",
)
async def update_order_status(
    order_id: str,
    schema: OrderStatusUpdate,
    service: OrderServiceDep,
) -> MessageResponse:
    await service.update_status(order_id, schema.status)
    return MessageResponse(message=SuccessMessages.ORDER_STATUS_UPDATED)


# ==============================================================================
# USERS
# ==============================================================================

@router.get("/users", summary="List all users")
async def list_users(service: UserServiceDep) -> List[Dict[str, Any]]:
    return await service.list_for_admin()


# ==============================================================================
# CATEGORIES
# ==============================================================================

@router.get("/categories", summary="List categories")
async def list_categories(service: CategoryServiceDep) -> List[Dict[str, Any]]:
    return await service.list_categories()


@router.post(
    "/categories",
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
async def create_category(schema: CategoryCreate, service: CategoryServiceDep) -> Dict[str, Any]:
    return await service.create_category(schema)


@router.put(
    "/categories/{category_id}",
    response_model=MessageResponse,
    summary="Update category",
)
async def update_category(
    category_id: str,
    schema: CategoryUpdate,
    service: CategoryServiceDep,
) -> MessageResponse:
    await service.update_category(category_id, schema)
    return MessageResponse(message=SuccessMessages.CATEGORY_UPDATED)


@router.delete(
    "/categories/{category_id}",
    response_model=MessageResponse,
    summary="Delete category",
)
async def delete_category(category_id: str, service: CategoryServiceDep) -> MessageResponse:
    await service.delete_category(category_id)
    return MessageResponse(message=SuccessMessages.CATEGORY_DELETED)
