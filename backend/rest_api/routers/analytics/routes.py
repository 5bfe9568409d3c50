"""
Analytics router.
Dashboard, sales and best-seller reports, recomputed on every request.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.routers._common import current_account, require_plan
from rest_api.services.domain import AnalyticsService
from rest_api.services.domain.analytics_service import DEFAULT_SALES_PERIOD, POPULAR_ITEMS_LIMIT
from shared.config.constants import SubscriptionPlan
from shared.infrastructure.db import get_db
from shared.utils.schemas import DashboardOutput, PopularItemsOutput, SalesOutput


router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/dashboard", response_model=DashboardOutput)
def dashboard(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    account: User = Depends(require_plan(SubscriptionPlan.BASIC.value)),
    db: Session = Depends(get_db),
) -> DashboardOutput:
    """
    Dashboard figures for the account. Requires the basic plan or above;
    lower plans get 402 with currentPlan and requiredPlan.

    startDate/endDate (inclusive) narrow revenueData, popularItems and
    tableUtilization; without them those cover the last 30 days.
    """
    return AnalyticsService(db).dashboard(account.id, start_date=start_date, end_date=end_date)


@router.get("/sales", response_model=SalesOutput)
def sales(
    period: str = Query(default=DEFAULT_SALES_PERIOD, description="7d, 30d or 90d"),
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> SalesOutput:
    return AnalyticsService(db).sales(account.id, period)


@router.get("/popular-items", response_model=PopularItemsOutput)
def popular_items(
    limit: int = Query(default=POPULAR_ITEMS_LIMIT, ge=1, le=50),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> PopularItemsOutput:
    """Best sellers by quantity, aggregated from order line items."""
    items = AnalyticsService(db).popular_items(
        account.id, limit, start_date=start_date, end_date=end_date
    )
    return PopularItemsOutput(items=items)
