"""
Centralized HTTP exceptions for consistent error handling.

Usage:
    from shared.utils.exceptions import NotFoundError, ValidationError

    raise NotFoundError("Order", order_id)
    raise ValidationError("Items must not be empty", field="items")
    raise InvalidTransitionError("Order", "completed", "pending")
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str | dict[str, Any],
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        message = detail["message"] if isinstance(detail, dict) else detail
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(message, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Rows owned by another tenant are reported exactly like missing rows.

    Usage:
        raise NotFoundError("Order", 123)
        raise NotFoundError("Table", table_id, tenant_id=tenant_id)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} not found",
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 401 / 402 / 403 Errors
# =============================================================================


class AuthenticationError(AppException):
    """Missing, malformed or expired credentials (401)."""

    def __init__(self, detail: str = ErrorMessages.INVALID_TOKEN, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


class UpgradeRequiredError(AppException):
    """
    The tenant's plan is below what the operation needs (402).

    The response body names both plans so the client can offer an upgrade.
    """

    def __init__(self, current_plan: str, required_plan: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail={
                "message": ErrorMessages.UPGRADE_REQUIRED,
                "currentPlan": current_plan,
                "requiredPlan": required_plan,
            },
            log_level="info",
            current_plan=current_plan,
            required_plan=required_plan,
            **log_context,
        )


class ForbiddenError(AppException):
    """
    Authorization error (403).

    Usage:
        raise ForbiddenError(ErrorMessages.SUBSCRIPTION_EXPIRED, user_id=user.id)
    """

    def __init__(self, detail: str = "Access denied", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Table not found", field="tableId")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class InvalidTransitionError(ValidationError):
    """Disallowed status transition."""

    def __init__(self, entity: str, from_status: str, to_status: str, **log_context: Any):
        detail = f"Invalid status transition from '{from_status}' to '{to_status}'"
        super().__init__(detail, entity=entity, from_status=from_status, to_status=to_status, **log_context)


class DuplicateEntityError(ValidationError):
    """Entity already exists (unique constraint)."""

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(detail, **log_context)


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    Usage:
        raise InternalError("Failed to complete order", order_id=123)
    """

    def __init__(self, detail: str = ErrorMessages.INTERNAL_ERROR, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )


class DatabaseError(InternalError):
    """Database operation failed."""

    def __init__(self, operation: str, **log_context: Any):
        detail = f"Database error while trying to {operation}. Please try again."
        super().__init__(detail, operation=operation, **log_context)
