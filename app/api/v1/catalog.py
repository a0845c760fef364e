# ==============================================================================
# CATALOG ENDPOINTS - Categories & Products
# ==============================================================================
# Storefront read routes
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query

from app.api.dependencies import CategoryServiceDep, ProductServiceDep

categories_router = APIRouter(prefix="/categories", tags=["Catalog"])
products_router = APIRouter(prefix="/products", tags=["Catalog"])


@categories_router.get(
    "",
    summary="List categories",
    description="All categories, name ascending.",
)
async def list_categories(service: CategoryServiceDep) -> List[Dict[str, Any]]:
    return await service.list_categories()


@products_router.get(
    "",
    summary="List products",
    description="Active products, optionally filtered by category ID.",
)
async def list_products(
    service: ProductServiceDep,
    category: Optional[str] = Query(None, description="Category ID filter"),
) -> List[Dict[str, Any]]:
    """List storefront products."""
    return await service.list_active(category)


@products_router.get(
    "/{product_id}",
    summary="Get product",
    description="A single product by ID.",
)
async def get_product(product_id: str, service: ProductServiceDep) -> Dict[str, Any]:
    return await service.get_by_id(product_id)
