"""
Table Service - floor plan management.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import Order, Reservation, Table, utc_now
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import (
    ACTIVE_ORDER_STATUSES,
    UPCOMING_RESERVATION_WINDOW_HOURS,
    ErrorMessages,
    ReservationStatus,
)
from shared.config.logging import get_logger
from shared.utils.exceptions import AppException, DuplicateEntityError
from shared.utils.schemas import OrderBrief, ReservationBrief, TableOutput

logger = get_logger(__name__)


class TableService(BaseCRUDService[Table, TableOutput]):
    """Service for tables and their live activity."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Table,
            output_schema=TableOutput,
            entity_name="Table",
        )

    def list_tables(self, tenant_id: int) -> list[TableOutput]:
        """
        All tables of the tenant ordered by number, each with its
        active orders and the confirmed reservations of the next 24 hours.
        """
        tables = self._repo.find_all(tenant_id, order_by=Table.table_number)
        if not tables:
            return []

        table_ids = [t.id for t in tables]
        orders_by_table = self._active_orders(tenant_id, table_ids)
        reservations_by_table = self._upcoming_reservations(tenant_id, table_ids)

        return [
            self._with_activity(t, orders_by_table.get(t.id, []), reservations_by_table.get(t.id, []))
            for t in tables
        ]

    def get_table(self, table_id: int, tenant_id: int) -> TableOutput:
        """Single table with its activity."""
        table = self.get_entity(table_id, tenant_id)
        orders = self._active_orders(tenant_id, [table.id]).get(table.id, [])
        reservations = self._upcoming_reservations(tenant_id, [table.id]).get(table.id, [])
        return self._with_activity(table, orders, reservations)

    # =========================================================================
    # Internals
    # =========================================================================

    def _active_orders(self, tenant_id: int, table_ids: list[int]) -> dict[int, list[Order]]:
        rows = self._db.scalars(
            select(Order)
            .where(
                Order.tenant_id == tenant_id,
                Order.table_id.in_(table_ids),
                Order.status.in_([s.value for s in ACTIVE_ORDER_STATUSES]),
            )
            .order_by(Order.created_at.desc())
        ).all()
        grouped: dict[int, list[Order]] = {}
        for order in rows:
            grouped.setdefault(order.table_id, []).append(order)
        return grouped

    def _upcoming_reservations(
        self, tenant_id: int, table_ids: list[int]
    ) -> dict[int, list[Reservation]]:
        now = utc_now()
        horizon = now + timedelta(hours=UPCOMING_RESERVATION_WINDOW_HOURS)
        rows = self._db.scalars(
            select(Reservation)
            .where(
                Reservation.tenant_id == tenant_id,
                Reservation.table_id.in_(table_ids),
                Reservation.status == ReservationStatus.CONFIRMED.value,
                Reservation.reservation_date >= now,
                Reservation.reservation_date <= horizon,
            )
            .order_by(Reservation.reservation_date.asc())
        ).all()
        grouped: dict[int, list[Reservation]] = {}
        for reservation in rows:
            grouped.setdefault(reservation.table_id, []).append(reservation)
        return grouped

    def _with_activity(
        self,
        table: Table,
        orders: list[Order],
        reservations: list[Reservation],
    ) -> TableOutput:
        output = self.to_output(table)
        output.active_orders = [OrderBrief.model_validate(o) for o in orders]
        output.upcoming_reservations = [ReservationBrief.model_validate(r) for r in reservations]
        return output

    def _on_integrity_error(
        self, error: IntegrityError, operation: str, **log_context: Any
    ) -> AppException:
        # The only unique key on a table is (tenant_id, table_number)
        logger.info("Duplicate table number rejected", operation=operation, **log_context)
        return DuplicateEntityError(ErrorMessages.TABLE_NUMBER_EXISTS)
