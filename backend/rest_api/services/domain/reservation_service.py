"""
Reservation Service.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from sqlalchemy.orm import Session, selectinload

from rest_api.models import Reservation, Table, as_utc
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.crud import TenantRepository
from shared.utils.exceptions import ValidationError
from shared.utils.schemas import ReservationOutput


class ReservationService(BaseCRUDService[Reservation, ReservationOutput]):
    """
    Service for reservations.

    A reservation may point at one of the tenant's tables. Creating or
    changing a reservation never changes the table's floor status.
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Reservation,
            output_schema=ReservationOutput,
            entity_name="Reservation",
        )
        self._tables = TenantRepository(Table, db)

    def list_reservations(
        self,
        tenant_id: int,
        *,
        on_date: date | None = None,
        table_id: int | None = None,
    ) -> list[ReservationOutput]:
        """Reservations ordered by time, optionally for one UTC day or one table."""
        where: list[Any] = []
        if on_date is not None:
            start = datetime.combine(on_date, time.min, tzinfo=timezone.utc)
            where.append(Reservation.reservation_date >= start)
            where.append(Reservation.reservation_date < start + timedelta(days=1))
        if table_id is not None:
            where.append(Reservation.table_id == table_id)

        reservations = self._repo.find_all(
            tenant_id,
            where=where,
            options=[selectinload(Reservation.table)],
            order_by=Reservation.reservation_date.asc(),
        )
        return [self.to_output(r) for r in reservations]

    def get_reservation(self, reservation_id: int, tenant_id: int) -> ReservationOutput:
        reservation = self.get_entity(
            reservation_id, tenant_id, options=[selectinload(Reservation.table)]
        )
        return self.to_output(reservation)

    def _validate_create(self, data: dict[str, Any], tenant_id: int) -> None:
        self._check_table(data.get("table_id"), tenant_id)
        data["reservation_date"] = as_utc(data["reservation_date"])

    def _validate_update(self, entity: Reservation, data: dict[str, Any], tenant_id: int) -> None:
        if "table_id" in data:
            self._check_table(data["table_id"], tenant_id)
        if data.get("reservation_date") is not None:
            data["reservation_date"] = as_utc(data["reservation_date"])

    def _check_table(self, table_id: int | None, tenant_id: int) -> None:
        if table_id is None:
            return
        if not self._tables.exists(table_id, tenant_id):
            raise ValidationError("Table not found", field="tableId", table_id=table_id)
