"""
Security module: token issuance and verification, password hashing, rate limiting.
"""

from shared.security.auth import (
    sign_jwt,
    sign_account_token,
    verify_jwt,
    get_bearer_token,
    current_user_context,
)
from shared.security.password import hash_password, verify_password, needs_rehash
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    # auth
    "sign_jwt",
    "sign_account_token",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    # password
    "hash_password",
    "verify_password",
    "needs_rehash",
    # rate limiting
    "limiter",
    "rate_limit_exceeded_handler",
]
