"""
Authentication utilities.
Issues and verifies the JWT bearer tokens used by restaurant accounts.

Tokens carry the account ID as `sub` plus the account email. They are
signed with JWT_SECRET only; there is no fallback secret.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt
from fastapi import Header

from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger
from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, settings
from shared.utils.exceptions import AuthenticationError

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """
    Sign a JWT token with the given payload.

    Args:
        payload: Claims to include in the token (sub, email).
        ttl_seconds: Token lifetime in seconds. Defaults to JWT_EXPIRE_DAYS.

    Returns:
        Signed JWT token string.

    Raises:
        ConfigurationError: If JWT_SECRET is not configured.
    """
    secret = settings.require_jwt_secret()
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_expire_days * 24 * 60 * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, secret, algorithm=JWT_ALGORITHM)


def sign_account_token(account_id: int, email: str) -> str:
    """Issue the bearer token returned by register and login."""
    return sign_jwt({"sub": str(account_id), "email": email})


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded token claims.

    Raises:
        AuthenticationError: If the token is invalid, expired or lacks a usable subject.
    """
    secret = settings.require_jwt_secret()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(ErrorMessages.INVALID_TOKEN, reason="expired")
    except jwt.InvalidTokenError as e:
        # Log the actual error, return a generic message to the client
        raise AuthenticationError(ErrorMessages.INVALID_TOKEN, reason=str(e))

    try:
        int(payload["sub"])
    except (KeyError, ValueError, TypeError):
        raise AuthenticationError(ErrorMessages.INVALID_TOKEN, reason="malformed subject")

    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        AuthenticationError: If header is missing or malformed.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError(ErrorMessages.TOKEN_REQUIRED)
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError(ErrorMessages.TOKEN_REQUIRED)
    return token


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency returning the verified token claims.

    Usage:
        @router.get("/protected")
        def protected_endpoint(ctx = Depends(current_user_context)):
            account_id = int(ctx["sub"])
    """
    token = get_bearer_token(authorization)
    return verify_jwt(token)
