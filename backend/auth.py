"""
Bearer token verification.

Tokens are HS256 JWTs signed by the authentication collaborator with:
- ``sub``: the user's ID
- ``role``: ADMIN, TRAINER or CLIENT

The role is converted to ``Role`` here, once; nothing downstream compares raw
role strings.
"""
import logging
from typing import Optional

import jwt
from fastapi import HTTPException

from backend.settings import Settings
from models.user import CurrentUser, Role

logger = logging.getLogger(__name__)


def validate_jwt(authorization: Optional[str], settings: Settings) -> CurrentUser:
    """
    Validate an ``Authorization`` header and return the caller.

    Raises:
        HTTPException: 401 for a missing, malformed, expired or invalid token
    """
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Missing authentication. Provide Authorization header.",
        )
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = authorization.split(" ", 1)[1]
    payload = decode_token(token, settings)

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing user ID")

    try:
        role = Role(str(payload.get("role", "")).upper())
    except ValueError:
        logger.warning(f"Token for {user_id} carries unknown role {payload.get('role')!r}")
        raise HTTPException(status_code=401, detail="Token missing or invalid role")

    logger.debug(f"JWT validated for user: {user_id} ({role.value})")
    return CurrentUser(user_id=str(user_id), role=role)


def decode_token(token: str, settings: Settings) -> dict:
    """Verify signature, expiry and (when configured) audience."""
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT: {e}")
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")
