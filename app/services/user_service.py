# ==============================================================================
# USER SERVICE - Registration & Authentication
# ==============================================================================
# Business logic for customer accounts and login
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, List

from app.core.constants import ErrorMessages, Roles
from app.core.exceptions import (
    AlreadyExistsError,
    AuthenticationError,
    EngineError,
    OperationFailedError,
)
from app.core.security import create_access_token, hash_password, verify_password
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.domain_models import new_id
from app.schemas.user import UserRegister
from app.services.base_service import BaseService, Row

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """
    User service for registration and authentication.

    New accounts get the ``customer`` role; tokens carry the user id and
    role name.
    """

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        """Initialize user service."""
        super().__init__(adapter, "users", "User not found")

    async def _email_taken(self, email: str) -> bool:
        return bool(await self.find_all(where={"email": email}, limit=1))

    async def _role_id(self, name: str, fallback: str) -> str:
        result = await self._adapter.execute("SELECT id FROM roles WHERE name = $1", [name])
        return result.scalar(default=fallback)

    # ==========================================================================
    # AUTHENTICATION
    # ==========================================================================

    async def register(self, schema: UserRegister) -> Row:
        """
        Register a new customer account.

        Args:
            schema: Registration data

        Returns:
            Dict with id, full_name and email

        Raises:
            AlreadyExistsError: If the email is already registered
        """
        email = str(schema.email)
        if await self._email_taken(email):
            raise AlreadyExistsError(message=ErrorMessages.USER_EXISTS, resource_type="user")

        role_id = await self._role_id(Roles.CUSTOMER, Roles.CUSTOMER_ID)
        user_id = new_id()

        try:
            result = await self._adapter.execute(
                "INSERT INTO users (id, full_name, email, password_hash, phone, role_id) "
                "VALUES ($1, $2, $3, $4, $5, $6) RETURNING id, full_name, email",
                [
                    user_id,
                    schema.full_name,
                    email,
                    hash_password(schema.password),
                    schema.phone,
                    role_id,
                ],
            )
        except EngineError as e:
            # Lost a race with a concurrent registration of the same email
            if await self._email_taken(email):
                raise AlreadyExistsError(
                    message=ErrorMessages.USER_EXISTS, resource_type="user"
                ) from e
            logger.error(f"Registration failed: {e.message}")
            raise OperationFailedError("Registration failed") from e

        logger.info(f"Registered user {user_id}")
        return result.first() or {"id": user_id, "full_name": schema.full_name, "email": email}

    async def authenticate(self, email: str, password: str) -> Dict[str, Any]:
        """
        Check credentials and issue an access token.

        Args:
            email: Account email
            password: Plaintext password

        Returns:
            Dict with ``token`` and ``user`` (id, full_name, email, role)

        Raises:
            AuthenticationError: If the credentials are wrong or the account is disabled
        """
        result = await self._adapter.execute(
            "SELECT u.*, r.name AS role_name FROM users u "
            "LEFT JOIN roles r ON u.role_id = r.id WHERE u.email = $1",
            [email],
        )
        user = result.first()

        if not user or not verify_password(password, user.get("password_hash")):
            raise AuthenticationError(message=ErrorMessages.INVALID_CREDENTIALS)

        if not user.get("is_active", True):
            raise AuthenticationError(message=ErrorMessages.ACCOUNT_DISABLED)

        token = create_access_token(user_id=user["id"], role=user.get("role_name"))
        return {
            "token": token,
            "user": {
                "id": user["id"],
                "full_name": user["full_name"],
                "email": user["email"],
                "role": user.get("role_name"),
            },
        }

    # ==========================================================================
    # ADMINISTRATION
    # ==========================================================================

    async def list_for_admin(self) -> List[Row]:
        """All accounts with role names, newest first; hashes are never returned."""
        result = await self._adapter.execute(
            "SELECT u.id, u.full_name, u.email, u.phone, u.is_active, u.created_at, "
            "r.name AS role FROM users u LEFT JOIN roles r ON u.role_id = r.id "
            "ORDER BY u.created_at DESC"
        )
        return result.rows
