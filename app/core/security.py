# ==============================================================================
# SECURITY MODULE - Authentication Primitives
# ==============================================================================
# Password hashing (bcrypt via passlib) and JWT issue/decode (python-jose)
# ==============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.settings import settings
from app.core.exceptions import InvalidTokenError


# ==============================================================================
# PASSWORD HASHING
# ==============================================================================

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """
    Hash a plaintext password using bcrypt.

    The work factor comes from ``BCRYPT_ROUNDS``.

    Args:
        password: Plaintext password to hash

    Returns:
        Hashed password string safe for storage

    Example:
        >>> hashed = hash_password("admin123")
        >>> verify_password("admin123", hashed)
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a plaintext password against its hash.

    Args:
        plain_password: Plaintext password to verify
        hashed_password: Stored password hash (may be missing)

    Returns:
        True if password matches, False otherwise
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognizable hash
        return False


# ==============================================================================
# JWT TOKEN MANAGEMENT
# ==============================================================================

def create_access_token(
    user_id: str,
    role: Optional[str],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed access token.

    The payload carries the user identifier as ``id`` (and ``sub``) and
    the role name as ``role``; the admin gate reads ``role`` only.

    Args:
        user_id: Identifier of the authenticated user
        role: Role name ("admin", "customer") or None
        expires_delta: Custom lifetime (default ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    to_encode: Dict[str, Any] = {
        "sub": str(user_id),
        "id": str(user_id),
        "role": role,
        "iat": now,
        "exp": expire,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT.

    Verifies the signature and expiration time.

    Args:
        token: JWT string to decode

    Returns:
        Token payload dictionary

    Raises:
        InvalidTokenError: If the token is expired, malformed or forged
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except JWTError as e:
        raise InvalidTokenError() from e
