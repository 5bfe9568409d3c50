"""
Utilities module: Exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    AppException,
    NotFoundError,
    AuthenticationError,
    ForbiddenError,
    UpgradeRequiredError,
    ValidationError,
    InvalidTransitionError,
    DuplicateEntityError,
)
from shared.utils.validators import escape_like_pattern, contains_pattern

__all__ = [
    # exceptions
    "AppException",
    "NotFoundError",
    "AuthenticationError",
    "ForbiddenError",
    "UpgradeRequiredError",
    "ValidationError",
    "InvalidTransitionError",
    "DuplicateEntityError",
    # validators
    "escape_like_pattern",
    "contains_pattern",
]
