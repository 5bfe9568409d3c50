"""
Order Domain Service.

Owns the order lifecycle and its effect on the floor plan:

    create (with table)  -> table occupied
    status -> completed  -> table available

Each of these is one transaction: the order write and the table write
commit together or not at all.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from rest_api.models import Order, Table
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import OrderStatus, TableStatus, validate_order_transition
from shared.config.logging import get_logger
from shared.utils.exceptions import InvalidTransitionError, ValidationError
from shared.utils.schemas import OrderAnalytics, OrderOutput

logger = get_logger(__name__)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[start, end) of a calendar day in UTC."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


class OrderService(BaseCRUDService[Order, OrderOutput]):
    """Service for orders and their status lifecycle."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Order,
            output_schema=OrderOutput,
            entity_name="Order",
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def list_orders(
        self,
        tenant_id: int,
        *,
        status: str | None = None,
        on_date: date | None = None,
        table_id: int | None = None,
        order_type: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[OrderOutput], int]:
        """
        Filtered orders, newest first, with the unpaged total.

        Returns:
            (orders on the requested page, total matching orders)
        """
        where: list[Any] = []
        if status:
            where.append(Order.status == status)
        if on_date is not None:
            start, end = day_bounds(on_date)
            where.append(Order.created_at >= start)
            where.append(Order.created_at < end)
        if table_id is not None:
            where.append(Order.table_id == table_id)
        if order_type:
            where.append(Order.order_type == order_type)

        orders = self._repo.find_all(
            tenant_id,
            where=where,
            options=[selectinload(Order.table)],
            order_by=[Order.created_at.desc(), Order.id.desc()],
            limit=limit,
            offset=offset,
        )
        total = self._repo.count(tenant_id, where=where)
        return [self.to_output(o) for o in orders], total

    def get_order(self, order_id: int, tenant_id: int) -> OrderOutput:
        order = self.get_entity(order_id, tenant_id, options=[selectinload(Order.table)])
        return self.to_output(order)

    def analytics(
        self,
        tenant_id: int,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> OrderAnalytics:
        """
        Totals over the tenant's orders, optionally within an inclusive
        date range. Revenue and average ignore cancelled orders.
        """
        where: list[Any] = [Order.tenant_id == tenant_id]
        if start_date is not None:
            where.append(Order.created_at >= day_bounds(start_date)[0])
        if end_date is not None:
            where.append(Order.created_at < day_bounds(end_date)[1])

        total_orders = self._db.scalar(select(func.count(Order.id)).where(*where)) or 0

        billable = [*where, Order.status != OrderStatus.CANCELLED.value]
        total_revenue = self._db.scalar(
            select(func.coalesce(func.sum(Order.total), 0)).where(*billable)
        )
        average = self._db.scalar(
            select(func.coalesce(func.avg(Order.total), 0)).where(*billable)
        )

        breakdown_rows = self._db.execute(
            select(Order.status, func.count(Order.id)).where(*where).group_by(Order.status)
        ).all()

        return OrderAnalytics(
            total_orders=total_orders,
            total_revenue=round(float(total_revenue or 0), 2),
            average_order_value=round(float(average or 0), 2),
            status_breakdown={status: count for status, count in breakdown_rows},
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def create(self, data: dict[str, Any], tenant_id: int) -> OrderOutput:
        """
        Create a pending order. A dine-in table given by id is marked
        occupied in the same transaction.

        Raises:
            ValidationError: If tableId is not one of the tenant's tables.
        """
        table = self._owned_table(data.get("table_id"), tenant_id)

        data.pop("status", None)
        order = Order(**data, tenant_id=tenant_id, status=OrderStatus.PENDING.value)
        self._repo.add(order)
        if table is not None:
            table.status = TableStatus.OCCUPIED.value

        self._commit("create order", tenant_id=tenant_id, table_id=data.get("table_id"))
        self._repo.refresh(order)

        logger.info(
            "Order created",
            order_id=order.id,
            tenant_id=tenant_id,
            table_id=order.table_id,
            total=order.total,
        )
        return self.to_output(order)

    def update_status(self, order_id: int, new_status: OrderStatus | str, tenant_id: int) -> OrderOutput:
        """
        Move an order to a new status.

        Re-sending the current status changes nothing. Completing an order
        frees its table in the same transaction.

        Raises:
            NotFoundError: If the order is missing or belongs to another tenant.
            InvalidTransitionError: If the move is not allowed.
        """
        order = self.get_entity(order_id, tenant_id)
        target = OrderStatus(new_status)
        current = order.status

        if current == target.value:
            return self.to_output(order)

        if not validate_order_transition(current, target):
            raise InvalidTransitionError(
                "Order", current, target.value, order_id=order_id, tenant_id=tenant_id
            )

        order.status = target.value
        if target == OrderStatus.COMPLETED and order.table_id is not None:
            table = self._owned_table(order.table_id, tenant_id, required=False)
            if table is not None:
                table.status = TableStatus.AVAILABLE.value

        self._commit("update order status", order_id=order_id, status=target.value)
        self._repo.refresh(order)

        logger.info(
            "Order status changed",
            order_id=order_id,
            tenant_id=tenant_id,
            from_status=current,
            to_status=target.value,
        )
        return self.to_output(order)

    def _validate_update(self, entity: Order, data: dict[str, Any], tenant_id: int) -> None:
        # Status only moves through update_status
        data.pop("status", None)
        if data.get("table_id") is not None:
            self._owned_table(data["table_id"], tenant_id)

    # =========================================================================
    # Internals
    # =========================================================================

    def _owned_table(
        self, table_id: int | None, tenant_id: int, *, required: bool = True
    ) -> Table | None:
        if table_id is None:
            return None
        table = self._db.scalar(
            select(Table).where(Table.id == table_id, Table.tenant_id == tenant_id)
        )
        if table is None and required:
            raise ValidationError("Table not found", field="tableId", table_id=table_id)
        return table
