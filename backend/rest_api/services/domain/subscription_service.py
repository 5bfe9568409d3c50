"""
Subscription Service.

Plans, plan changes and usage against plan limits. The account row
carries the subscription state; there is no separate billing table.
"""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.orm import Session

from rest_api.models import Order, Recipe, Table, User, utc_now
from rest_api.services.base_service import BaseService
from rest_api.services.crud.repository import TenantRepository
from shared.config.constants import (
    PLAN_HIERARCHY,
    SUBSCRIPTION_PLANS,
    UNLIMITED,
    ErrorMessages,
    SubscriptionStatus,
    plan_limit,
)
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.utils.exceptions import UpgradeRequiredError, ValidationError
from shared.utils.schemas import (
    CurrentSubscription,
    PlanChangeResponse,
    PlanDetails,
    UsageCounter,
    UsageOutput,
)

logger = get_logger(__name__)

# Resources whose count is capped by the plan, and the model counted
LIMITED_RESOURCES = {
    "recipes": Recipe,
    "tables": Table,
    "orders": Order,
}

USAGE_WINDOW_DAYS = 30


def list_plans() -> dict[str, PlanDetails]:
    return {plan_id: PlanDetails(**details) for plan_id, details in SUBSCRIPTION_PLANS.items()}


class SubscriptionService(BaseService[User]):
    """Service for the account's subscription."""

    entity_name = "User"

    def __init__(self, db: Session):
        super().__init__(db, User)

    def current(self, account: User) -> CurrentSubscription:
        details = SUBSCRIPTION_PLANS.get(account.subscription_plan, SUBSCRIPTION_PLANS["free"])
        return CurrentSubscription(
            plan=account.subscription_plan,
            status=account.subscription_status,
            expires_at=account.subscription_expires_at,
            plan_details=PlanDetails(**details),
        )

    def change_plan(self, account: User, plan: str) -> PlanChangeResponse:
        """
        Switch the account to `plan` for one subscription period from now.

        Raises:
            ValidationError: If the plan is unknown.
        """
        if plan not in SUBSCRIPTION_PLANS:
            raise ValidationError(ErrorMessages.INVALID_PLAN, plan=plan, user_id=account.id)

        previous = account.subscription_plan
        account.subscription_plan = plan
        account.subscription_status = SubscriptionStatus.ACTIVE
        account.subscription_expires_at = utc_now() + timedelta(days=settings.subscription_period_days)

        self._commit("change subscription plan", user_id=account.id, plan=plan)
        self._db.refresh(account)

        logger.info("Subscription plan changed", user_id=account.id, from_plan=previous, to_plan=plan)
        return PlanChangeResponse(
            message="Subscription updated successfully",
            plan=account.subscription_plan,
            status=account.subscription_status,
            expires_at=account.subscription_expires_at,
        )

    def usage(self, account: User) -> UsageOutput:
        """Resource counts against the plan's limits. Orders count the last 30 days."""
        since = utc_now() - timedelta(days=USAGE_WINDOW_DAYS)
        counters = {}
        for resource, model in LIMITED_RESOURCES.items():
            where = [model.created_at >= since] if resource == "orders" else None
            used = TenantRepository(model, self._db).count(account.id, where=where)
            counters[resource] = UsageCounter(
                used=used, limit=plan_limit(account.subscription_plan, resource)
            )
        return UsageOutput(plan=account.subscription_plan, **counters)

    def ensure_capacity(self, account: User, resource: str) -> None:
        """
        Check that one more `resource` fits in the account's plan.

        Raises:
            UpgradeRequiredError: If the plan limit is already reached.
        """
        limit = plan_limit(account.subscription_plan, resource)
        if limit == UNLIMITED:
            return
        used = TenantRepository(LIMITED_RESOURCES[resource], self._db).count(account.id)
        if used < limit:
            return
        raise UpgradeRequiredError(
            account.subscription_plan,
            self._smallest_plan_fitting(resource, used + 1),
            user_id=account.id,
            resource=resource,
            used=used,
            limit=limit,
        )

    @staticmethod
    def _smallest_plan_fitting(resource: str, needed: int) -> str:
        for plan in sorted(PLAN_HIERARCHY, key=PLAN_HIERARCHY.get):
            limit = plan_limit(plan, resource)
            if limit == UNLIMITED or limit >= needed:
                return plan
        return max(PLAN_HIERARCHY, key=PLAN_HIERARCHY.get)
