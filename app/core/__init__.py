# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Security, Exceptions, Constants
# ==============================================================================

"""
Core Module
===========

Contains core utilities and configurations for the application:
- settings: Environment configuration management
- security: JWT issuance and password hashing
- exceptions: Custom exception classes
- constants: Application-wide constants
"""

from app.core.settings import settings, get_settings, DatabaseType
from app.core.exceptions import (
    AppException,
    DatabaseError,
    EngineError,
    TransactionError,
    TranslationAmbiguity,
    SeedInitError,
    NotFoundError,
    AlreadyExistsError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
)

__all__ = [
    "settings",
    "get_settings",
    "DatabaseType",
    "AppException",
    "DatabaseError",
    "EngineError",
    "TransactionError",
    "TranslationAmbiguity",
    "SeedInitError",
    "NotFoundError",
    "AlreadyExistsError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
]
