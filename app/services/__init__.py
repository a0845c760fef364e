# ==============================================================================
# SERVICES PACKAGE INITIALIZATION
# ==============================================================================

"""
Service Layer
=============

Business logic for the storefront and back office:
- BaseService: Generic single-table operations
- UserService: Registration, login and account listing
- CategoryService / ProductService: Catalog management
- OrderService: Checkout and fulfilment
- ReviewService / QuoteService: Customer feedback
- VacancyService: Careers page
- AdminService: Dashboard figures
"""

from app.services.base_service import BaseService
from app.services.user_service import UserService
from app.services.catalog_service import CategoryService, ProductService
from app.services.order_service import OrderService
from app.services.feedback_service import QuoteService, ReviewService
from app.services.vacancy_service import VacancyService
from app.services.admin_service import AdminService

__all__ = [
    "BaseService",
    "UserService",
    "CategoryService",
    "ProductService",
    "OrderService",
    "QuoteService",
    "ReviewService",
    "VacancyService",
    "AdminService",
]
