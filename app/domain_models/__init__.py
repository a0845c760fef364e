# ==============================================================================
# DOMAIN MODELS PACKAGE INITIALIZATION
# ==============================================================================

"""
Domain Models
=============

SQLAlchemy declarative table definitions. They are never used through an
ORM session; ``app.database.setup`` compiles them into CREATE TABLE and
CREATE INDEX statements for the active engine.

- User/Role: Accounts and permissions
- Category/Product: Catalog
- Order/OrderItem: Purchases
- ProductReview/Quote: Customer feedback
- Career/Vacancy: Job listings
"""

from app.domain_models.base import SQLBase, CreatedAtMixin, TimestampMixin, new_id
from app.domain_models.user import Role, User
from app.domain_models.product import Category, Product
from app.domain_models.order import Order, OrderItem
from app.domain_models.review import ProductReview, Quote
from app.domain_models.career import Career, Vacancy

__all__ = [
    "SQLBase",
    "CreatedAtMixin",
    "TimestampMixin",
    "new_id",
    "Role",
    "User",
    "Category",
    "Product",
    "Order",
    "OrderItem",
    "ProductReview",
    "Quote",
    "Career",
    "Vacancy",
]
