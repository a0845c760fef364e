# ==============================================================================
# API V1 ENDPOINTS PACKAGE
# ==============================================================================

"""
API Endpoints
=============

Storefront, checkout, feedback and back-office routes.
"""

from app.api.v1.admin import router as admin_router
from app.api.v1.catalog import categories_router, products_router
from app.api.v1.feedback import quotes_router, reviews_router, vacancies_router
from app.api.v1.orders import router as orders_router
from app.api.v1.users import router as users_router

__all__ = [
    "admin_router",
    "categories_router",
    "products_router",
    "orders_router",
    "quotes_router",
    "reviews_router",
    "vacancies_router",
    "users_router",
]
