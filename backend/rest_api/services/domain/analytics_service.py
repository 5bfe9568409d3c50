"""
Analytics Domain Service.

Read-only reporting over a tenant's orders, tables and stock. Nothing is
cached or stored; every call recomputes from the current rows. The
queries run one after another on the request's session.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Optional, Tuple

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from rest_api.models import Order, Table, as_utc, utc_now
from rest_api.services.domain.inventory_service import InventoryService
from rest_api.services.domain.order_service import day_bounds
from shared.config.constants import OrderStatus, TableStatus
from shared.config.logging import get_logger
from shared.utils.exceptions import ValidationError
from shared.utils.schemas import (
    DailyRevenue,
    DashboardOutput,
    OrderLineItem,
    PopularItem,
    SalesOutput,
    TableUtilization,
)

logger = get_logger(__name__)

SALES_PERIODS: dict[str, int] = {"7d": 7, "30d": 30, "90d": 90}
DEFAULT_SALES_PERIOD = "30d"
POPULAR_ITEMS_LIMIT = 10
REVENUE_WINDOW_DAYS = 30

# [since, until) on Order.created_at; None leaves that side open
Window = Tuple[Optional[datetime], Optional[datetime]]


class AnalyticsService:
    """Dashboard, sales and best-seller reports."""

    def __init__(self, db: Session):
        self._db = db

    # =========================================================================
    # Reports
    # =========================================================================

    def dashboard(
        self,
        tenant_id: int,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> DashboardOutput:
        """
        Headline figures plus the revenue series, best sellers and table
        utilisation.

        The series and best sellers cover the last 30 days and utilisation
        covers all orders, unless either bound of an inclusive UTC date range
        is given. The headline figures always use their fixed windows.

        Raises:
            ValidationError: If startDate is after endDate.
        """
        now = utc_now()
        start_of_today = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
        week_ago = now - timedelta(days=7)
        month_ago = now - timedelta(days=REVENUE_WINDOW_DAYS)
        window = self._window(start_date, end_date, default_since=month_ago)

        today_orders = self._count_orders(tenant_id, Order.created_at >= start_of_today)
        today_revenue = self._sum_revenue(
            tenant_id,
            Order.created_at >= start_of_today,
            Order.status == OrderStatus.COMPLETED.value,
        )
        weekly_orders = self._count_orders(tenant_id, Order.created_at >= week_ago)
        monthly_revenue = self._sum_revenue(
            tenant_id,
            Order.created_at >= month_ago,
            Order.status == OrderStatus.COMPLETED.value,
        )
        low_stock_items = InventoryService(self._db).count_low_stock(tenant_id)
        active_tables = self._db.scalar(
            select(func.count(Table.id)).where(
                Table.tenant_id == tenant_id,
                Table.status != TableStatus.AVAILABLE.value,
            )
        ) or 0

        recent = self._orders_in(tenant_id, window, exclude_cancelled=True)

        return DashboardOutput(
            today_orders=today_orders,
            today_revenue=today_revenue,
            weekly_orders=weekly_orders,
            monthly_revenue=monthly_revenue,
            low_stock_items=low_stock_items,
            active_tables=active_tables,
            revenue_data=daily_revenue(recent),
            popular_items=aggregate_line_items(recent, POPULAR_ITEMS_LIMIT),
            table_utilization=self._table_utilization(
                tenant_id, self._window(start_date, end_date, default_since=None)
            ),
        )

    def sales(self, tenant_id: int, period: str = DEFAULT_SALES_PERIOD) -> SalesOutput:
        """
        Daily revenue of completed orders over the last 7, 30 or 90 days.

        Raises:
            ValidationError: If the period is not one of SALES_PERIODS.
        """
        if period not in SALES_PERIODS:
            raise ValidationError(
                f"Invalid period. Use one of: {', '.join(SALES_PERIODS)}", period=period
            )
        since = utc_now() - timedelta(days=SALES_PERIODS[period])
        orders = self._orders_in(tenant_id, (since, None), status=OrderStatus.COMPLETED.value)
        data = daily_revenue(orders)
        return SalesOutput(
            period=period,
            total_revenue=round(sum(day.revenue for day in data), 2),
            total_orders=len(orders),
            data=data,
        )

    def popular_items(
        self,
        tenant_id: int,
        limit: int = POPULAR_ITEMS_LIMIT,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[PopularItem]:
        """Best sellers by quantity over non-cancelled orders of the last 30 days or the given range."""
        window = self._window(
            start_date, end_date, default_since=utc_now() - timedelta(days=REVENUE_WINDOW_DAYS)
        )
        orders = self._orders_in(tenant_id, window, exclude_cancelled=True)
        return aggregate_line_items(orders, limit)

    # =========================================================================
    # Queries
    # =========================================================================

    def _count_orders(self, tenant_id: int, *where: Any) -> int:
        return self._db.scalar(
            select(func.count(Order.id)).where(Order.tenant_id == tenant_id, *where)
        ) or 0

    def _sum_revenue(self, tenant_id: int, *where: Any) -> float:
        total = self._db.scalar(
            select(func.coalesce(func.sum(Order.total), 0)).where(
                Order.tenant_id == tenant_id, *where
            )
        )
        return round(float(total or 0), 2)

    @staticmethod
    def _window(
        start_date: date | None, end_date: date | None, *, default_since: datetime | None
    ) -> Window:
        """[since, until) for an inclusive date range, or from default_since when no bound is given."""
        if start_date is None and end_date is None:
            return default_since, None
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(
                "startDate must not be after endDate",
                start_date=str(start_date),
                end_date=str(end_date),
            )
        since = day_bounds(start_date)[0] if start_date is not None else None
        until = day_bounds(end_date)[1] if end_date is not None else None
        return since, until

    @staticmethod
    def _window_clauses(window: Window) -> list[Any]:
        since, until = window
        clauses: list[Any] = []
        if since is not None:
            clauses.append(Order.created_at >= since)
        if until is not None:
            clauses.append(Order.created_at < until)
        return clauses

    def _orders_in(
        self,
        tenant_id: int,
        window: Window,
        *,
        status: str | None = None,
        exclude_cancelled: bool = False,
    ) -> list[Order]:
        query = select(Order).where(Order.tenant_id == tenant_id, *self._window_clauses(window))
        if status is not None:
            query = query.where(Order.status == status)
        if exclude_cancelled:
            query = query.where(Order.status != OrderStatus.CANCELLED.value)
        return list(self._db.scalars(query.order_by(Order.created_at.asc())).all())

    def _table_utilization(self, tenant_id: int, window: Window) -> list[TableUtilization]:
        order_count = func.count(Order.id)
        rows = self._db.execute(
            select(
                Table.id,
                Table.table_number,
                order_count,
                func.coalesce(func.sum(Order.total), 0),
            )
            .outerjoin(
                Order,
                and_(
                    Order.table_id == Table.id,
                    Order.tenant_id == tenant_id,
                    *self._window_clauses(window),
                ),
            )
            .where(Table.tenant_id == tenant_id)
            .group_by(Table.id, Table.table_number)
            .order_by(order_count.desc(), Table.table_number.asc())
        ).all()
        return [
            TableUtilization(
                table_id=table_id,
                table_number=table_number,
                total_orders=count,
                revenue=round(float(revenue or 0), 2),
            )
            for table_id, table_number, count, revenue in rows
        ]


# =============================================================================
# Aggregation helpers
# =============================================================================


def daily_revenue(orders: Iterable[Order]) -> list[DailyRevenue]:
    """Revenue and order count per UTC calendar day, oldest day first."""
    revenue: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for order in orders:
        day = as_utc(order.created_at).date().isoformat()
        revenue[day] += order.total
        counts[day] += 1
    return [
        DailyRevenue(date=day, revenue=round(revenue[day], 2), orders=counts[day])
        for day in sorted(revenue)
    ]


def aggregate_line_items(orders: Iterable[Order], limit: int) -> list[PopularItem]:
    """
    Sum quantity and revenue per item name over the orders' line items.

    Lines without a name are grouped under their id. Ties on quantity are
    broken by revenue, then name.
    """
    totals: dict[str, dict[str, Any]] = {}
    for order in orders:
        for line in order.items:
            line = line if isinstance(line, OrderLineItem) else OrderLineItem.model_validate(line)
            key = line.name or line.id
            entry = totals.setdefault(
                key, {"name": key, "category": line.category, "quantity": 0, "revenue": 0.0}
            )
            entry["quantity"] += line.quantity
            entry["revenue"] += line.line_total
            if entry["category"] is None:
                entry["category"] = line.category

    ranked = sorted(
        totals.values(),
        key=lambda e: (-e["quantity"], -e["revenue"], e["name"]),
    )
    return [
        PopularItem(
            name=e["name"],
            category=e["category"],
            quantity=e["quantity"],
            revenue=round(e["revenue"], 2),
        )
        for e in ranked[:limit]
    ]
