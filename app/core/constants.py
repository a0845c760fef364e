# ==============================================================================
# APPLICATION CONSTANTS - Centralized Configuration Values
# ==============================================================================
# Immutable constants used throughout the application
# Organized by category for easy maintenance
# ==============================================================================

from __future__ import annotations

from typing import Final


# ==============================================================================
# API CONSTANTS
# ==============================================================================

class APIConstants:
    """API-related constants."""

    REQUEST_ID_HEADER: Final[str] = "X-Request-ID"
    RESPONSE_TIME_HEADER: Final[str] = "X-Response-Time"


# ==============================================================================
# ROLE CONSTANTS
# ==============================================================================

class Roles:
    """Fixed roles seeded on every start."""

    ADMIN: Final[str] = "admin"
    CUSTOMER: Final[str] = "customer"

    # Well-known identifiers, identical on every deployment
    ADMIN_ID: Final[str] = "00000000-0000-0000-0000-000000000001"
    CUSTOMER_ID: Final[str] = "00000000-0000-0000-0000-000000000002"

    @classmethod
    def seeded(cls) -> list[tuple[str, str]]:
        """(id, name) pairs the initializer guarantees."""
        return [(cls.ADMIN_ID, cls.ADMIN), (cls.CUSTOMER_ID, cls.CUSTOMER)]


# ==============================================================================
# ORDER CONSTANTS
# ==============================================================================

class OrderConstants:
    """E-commerce order constants."""

    # Order statuses
    STATUS_PENDING: Final[str] = "pending"
    STATUS_SHIPPED: Final[str] = "shipped"

    # Payment statuses
    PAYMENT_UNPAID: Final[str] = "unpaid"
    PAYMENT_PAID: Final[str] = "paid"

    DEFAULT_PAYMENT_METHOD: Final[str] = "cod"


# ==============================================================================
# ERROR MESSAGES
# ==============================================================================

class ErrorMessages:
    """Standardized error messages."""

    # Authentication
    INVALID_CREDENTIALS: Final[str] = "Invalid credentials"
    ACCOUNT_DISABLED: Final[str] = "Account is disabled"
    NO_TOKEN: Final[str] = "No token provided"

    # Authorization
    ADMIN_REQUIRED: Final[str] = "Admin access required"

    # Resources
    USER_EXISTS: Final[str] = "User already exists"
    PRODUCT_NOT_FOUND: Final[str] = "Product not found"
    ORDER_NOT_FOUND: Final[str] = "Order not found"
    CATEGORY_NOT_FOUND: Final[str] = "Category not found"
    CATEGORY_EXISTS: Final[str] = "Category already exists"

    # Writes
    ORDER_CREATION_FAILED: Final[str] = "Order creation failed"

    # Generic
    INTERNAL: Final[str] = "Something went wrong!"


# ==============================================================================
# SUCCESS MESSAGES
# ==============================================================================

class SuccessMessages:
    """Standardized success messages."""

    API_RUNNING: Final[str] = "AR Surgical Hub API is running"
    PRODUCT_UPDATED: Final[str] = "Product updated"
    PRODUCT_DELETED: Final[str] = "Product deleted"
    ORDER_STATUS_UPDATED: Final[str] = "Order status updated"
    CATEGORY_UPDATED: Final[str] = "Category updated"
    CATEGORY_DELETED: Final[str] = "Category deleted"
