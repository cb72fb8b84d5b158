"""JWT creation and decoding for authentication."""

from datetime import datetime, timedelta
from typing import Any

import jwt

from rbac_api.core.config import Settings

# Claims every token issued by this service carries.
REQUIRED_CLAIMS = ["id", "role", "iat", "exp"]


def create_access_token(
    user_id: str, role: str, settings: Settings, now: datetime
) -> str:
    """Create a JWT access token with id, role, iat and exp (now + JWT_EXPIRE_MINUTES)."""
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "id": user_id,
        "role": role,
        "iat": now,
        "exp": expire,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Verify the signature and required claims of a JWT; return its payload.

    Expiry is not checked here so the caller can compare ``exp`` against its
    own clock. Raises jwt.PyJWTError on a malformed or badly signed token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={
            "verify_exp": False,
            "verify_iat": False,
            "require": REQUIRED_CLAIMS,
        },
    )
