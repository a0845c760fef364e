# ==============================================================================
# CUSTOM EXCEPTIONS - Application Error Hierarchy
# ==============================================================================
# Structured exception classes for consistent error handling
# Each exception maps to appropriate HTTP status codes
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception for all application errors.

    Provides a consistent interface for error handling with:
    - Error code for programmatic identification
    - HTTP status code mapping
    - Detailed message and optional context

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        status_code: HTTP status code to return
        details: Additional context dictionary

    Example:
        >>> raise AppException(
        ...     message="Something went wrong",
        ...     error_code="INTERNAL_ERROR",
        ...     status_code=500
        ... )
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to the JSON error body.

        Returns:
            Dictionary with the error message and code
        """
        body: Dict[str, Any] = {
            "error": self.message,
            "code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"status_code={self.status_code})"
        )


# ==============================================================================
# DATABASE EXCEPTIONS
# ==============================================================================

class DatabaseError(AppException):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to:
    - Connection issues
    - Statement execution failures
    - Transaction errors
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=503,
            details=details,
        )


class EngineError(DatabaseError):
    """
    Raised when the storage engine rejects a statement.

    Wraps the driver exception (syntax error, constraint violation,
    connectivity failure) without retrying. The driver exception is
    kept as ``original`` and chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str = "Database engine rejected the statement",
        original: Optional[BaseException] = None,
        statement: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if original is not None:
            details["engine_error"] = type(original).__name__
        super().__init__(message=message, details=details)
        self.error_code = "ENGINE_ERROR"
        self.original = original
        self.statement = statement


class TransactionError(DatabaseError):
    """
    Raised when transaction control is used out of order.

    COMMIT without an open transaction, or BEGIN while the calling
    task already holds one.
    """

    def __init__(
        self,
        message: str = "Transaction failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)
        self.error_code = "TRANSACTION_ERROR"
        self.status_code = 500


class TranslationAmbiguity(DatabaseError):
    """
    Raised when a RETURNING clause names no parseable target table.

    Adapters catch it and degrade to an empty row list.
    """

    def __init__(
        self,
        message: str = "Cannot determine RETURNING target table",
        statement: Optional[str] = None,
    ) -> None:
        super().__init__(message=message)
        self.error_code = "TRANSLATION_AMBIGUITY"
        self.statement = statement


class SeedInitError(DatabaseError):
    """
    Raised by a failing schema or seed step at startup.

    Never fatal: the initializer logs it and keeps serving.
    """

    def __init__(
        self,
        message: str = "Database initialization step failed",
        step: Optional[str] = None,
    ) -> None:
        super().__init__(message=message, details={"step": step} if step else None)
        self.error_code = "SEED_INIT_ERROR"
        self.step = step


# ==============================================================================
# RESOURCE EXCEPTIONS
# ==============================================================================

class NotFoundError(AppException):
    """
    Raised when a requested resource does not exist.

    Maps to HTTP 404 Not Found.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AlreadyExistsError(AppException):
    """
    Raised when attempting to create a resource that already exists.

    Maps to HTTP 400, matching the registration contract clients rely on.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="ALREADY_EXISTS",
            status_code=400,
        )
        self.resource_type = resource_type


class ValidationError(AppException):
    """
    Raised when input validation fails.

    Maps to HTTP 422 Unprocessable Entity.
    """

    def __init__(
        self,
        message: str = "Validation error",
        errors: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=422,
            details={"validation_errors": errors} if errors else None,
        )
        self.errors = errors or {}


class OperationFailedError(AppException):
    """
    Raised when a write could not be completed.

    Maps to HTTP 500 with a caller-facing message ("Order creation failed").
    """

    def __init__(
        self,
        message: str = "Operation failed",
    ) -> None:
        super().__init__(
            message=message,
            error_code="OPERATION_FAILED",
            status_code=500,
        )


# ==============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# ==============================================================================

class AuthenticationError(AppException):
    """
    Raised when authentication fails.

    Maps to HTTP 401 Unauthorized.

    Common causes:
    - Missing authentication header
    - Invalid credentials
    - Disabled account
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR",
            status_code=401,
            details=details,
        )


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT is invalid, malformed or expired."""

    def __init__(
        self,
        message: str = "Invalid token",
    ) -> None:
        super().__init__(message=message)
        self.error_code = "INVALID_TOKEN"


class AuthorizationError(AppException):
    """
    Raised when user lacks permission for an action.

    Maps to HTTP 403 Forbidden.
    """

    def __init__(
        self,
        message: str = "Permission denied",
        required_role: Optional[str] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="AUTHORIZATION_ERROR",
            status_code=403,
            details={"required_role": required_role} if required_role else None,
        )
