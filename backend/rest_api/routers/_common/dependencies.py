"""
Request dependencies shared by the protected routers.

Usage:
    @router.get("/orders")
    def list_orders(account: User = Depends(current_account)):
        ...

    @router.get("/dashboard", dependencies=[Depends(require_plan("basic"))])
    def dashboard(...):
        ...
"""

from typing import Any, Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from rest_api.models import User, as_utc, utc_now
from shared.config.constants import ErrorMessages, SubscriptionStatus, plan_meets
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.exceptions import ForbiddenError, UpgradeRequiredError


def current_account(
    ctx: dict[str, Any] = Depends(current_user_context),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to an active, unexpired account.

    Raises:
        AuthenticationError: 401 for a missing, malformed or invalid token.
        ForbiddenError: 403 if the account is gone, inactive or expired.
    """
    account_id = int(ctx["sub"])
    account = db.get(User, account_id)

    if account is None or account.subscription_status != SubscriptionStatus.ACTIVE:
        raise ForbiddenError(ErrorMessages.ACCOUNT_INACTIVE, user_id=account_id)

    expires_at = as_utc(account.subscription_expires_at)
    if expires_at is not None and expires_at < utc_now():
        raise ForbiddenError(ErrorMessages.SUBSCRIPTION_EXPIRED, user_id=account_id)

    return account


def require_plan(required_plan: str) -> Callable[..., User]:
    """
    Dependency factory: the account's plan must be at least `required_plan`.

    Raises:
        UpgradeRequiredError: 402 naming the current and required plans.
    """

    def checker(account: User = Depends(current_account)) -> User:
        if not plan_meets(account.subscription_plan, required_plan):
            raise UpgradeRequiredError(
                account.subscription_plan, required_plan, user_id=account.id
            )
        return account

    return checker


def client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None
