"""JWT utilities for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from src.config.settings import settings

ACCESS_TOKEN_TYPE = "access"
ADMIN_TOKEN_TYPE = "admin"


def create_access_token(
    data: dict[str, Any], expires_delta: timedelta | None = None, token_type: str = ACCESS_TOKEN_TYPE
) -> str:
    """Create a signed JWT.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional expiration time delta
        token_type: Value of the ``type`` claim (donor access or admin)

    Returns:
        Encoded JWT token string

    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire, "iat": datetime.now(UTC), "type": token_type})

    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT token.

    Raises:
        InvalidTokenError: If token is invalid or expired

    """
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])


def verify_token_type(payload: dict[str, Any], expected_type: str) -> bool:
    """Verify the token type matches expected."""
    return payload.get("type") == expected_type
