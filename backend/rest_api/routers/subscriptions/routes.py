"""
Subscriptions router.
Plan catalogue, current plan, plan changes and usage.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.routers._common import current_account
from rest_api.services.domain import SubscriptionService, list_plans
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    CurrentSubscription,
    PlanChange,
    PlanChangeResponse,
    PlanDetails,
    UsageOutput,
)


router = APIRouter(prefix="/api/subscriptions", tags=["subscriptions"])


@router.get("/plans", response_model=dict[str, PlanDetails])
def plans() -> dict[str, PlanDetails]:
    """Public plan catalogue. A limit of -1 means unlimited."""
    return list_plans()


@router.get("/current", response_model=CurrentSubscription)
def current_subscription(
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> CurrentSubscription:
    return SubscriptionService(db).current(account)


@router.put("/plan", response_model=PlanChangeResponse)
@router.post("/upgrade", response_model=PlanChangeResponse)
def change_plan(
    body: PlanChange,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> PlanChangeResponse:
    """Switch plan; the subscription becomes active for one period from now."""
    return SubscriptionService(db).change_plan(account, body.plan)


@router.get("/usage", response_model=UsageOutput)
def usage(
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> UsageOutput:
    return SubscriptionService(db).usage(account)
