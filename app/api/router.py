# ==============================================================================
# MAIN API ROUTER - Route Aggregation
# ==============================================================================
# Combines all endpoint routers under the API prefix
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from app.core.settings import settings
from app.api.v1 import (
    admin_router,
    categories_router,
    orders_router,
    products_router,
    quotes_router,
    reviews_router,
    users_router,
    vacancies_router,
)

# Create main API router
api_router = APIRouter()

for router in (
    users_router,
    categories_router,
    products_router,
    orders_router,
    quotes_router,
    reviews_router,
    vacancies_router,
    admin_router,
):
    api_router.include_router(router, prefix=settings.API_PREFIX)
