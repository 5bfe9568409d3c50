"""
Tables router.
Floor plan tables and reservations.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.routers._common import current_account
from rest_api.services.domain import ReservationService, SubscriptionService, TableService
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    MessageResponse,
    ReservationCreate,
    ReservationEnvelope,
    ReservationList,
    ReservationUpdate,
    TableCreate,
    TableEnvelope,
    TableList,
    TableUpdate,
)


router = APIRouter(prefix="/api/tables", tags=["tables"])


# =============================================================================
# Reservations (declared before /{table_id})
# =============================================================================


@router.get("/reservations", response_model=ReservationList)
def list_reservations(
    on_date: date | None = Query(default=None, alias="date", description="YYYY-MM-DD"),
    table_id: int | None = Query(default=None, alias="tableId"),
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> ReservationList:
    """Reservations in time order, each with its table summary."""
    reservations = ReservationService(db).list_reservations(
        account.id, on_date=on_date, table_id=table_id
    )
    return ReservationList(reservations=reservations)


@router.get("/reservations/{reservation_id}", response_model=ReservationEnvelope)
def get_reservation(
    reservation_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> ReservationEnvelope:
    reservation = ReservationService(db).get_reservation(reservation_id, account.id)
    return ReservationEnvelope(reservation=reservation)


@router.post("/reservations", response_model=ReservationEnvelope, status_code=status.HTTP_201_CREATED)
def create_reservation(
    body: ReservationCreate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> ReservationEnvelope:
    """
    Book a party. tableId, when given, must be one of the account's tables.
    The table's floor status is left as it is.
    """
    reservation = ReservationService(db).create(body.model_dump(), account.id)
    return ReservationEnvelope(message="Reservation created successfully", reservation=reservation)


@router.put("/reservations/{reservation_id}", response_model=ReservationEnvelope)
def update_reservation(
    reservation_id: int,
    body: ReservationUpdate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> ReservationEnvelope:
    reservation = ReservationService(db).update(
        reservation_id, body.model_dump(exclude_unset=True), account.id
    )
    return ReservationEnvelope(message="Reservation updated successfully", reservation=reservation)


@router.delete("/reservations/{reservation_id}", response_model=MessageResponse)
def delete_reservation(
    reservation_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> MessageResponse:
    ReservationService(db).delete(reservation_id, account.id)
    return MessageResponse(message="Reservation deleted successfully")


# =============================================================================
# Tables
# =============================================================================


@router.get("", response_model=TableList)
def list_tables(
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> TableList:
    """Tables by number, with active orders and the next 24 hours of confirmed reservations."""
    return TableList(tables=TableService(db).list_tables(account.id))


@router.get("/{table_id}", response_model=TableEnvelope)
def get_table(
    table_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> TableEnvelope:
    return TableEnvelope(table=TableService(db).get_table(table_id, account.id))


@router.post("", response_model=TableEnvelope, status_code=status.HTTP_201_CREATED)
def create_table(
    body: TableCreate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> TableEnvelope:
    """
    Add a table. A table number already used by the account is rejected
    with 400 by the database's unique constraint.
    """
    SubscriptionService(db).ensure_capacity(account, "tables")
    table = TableService(db).create(body.model_dump(), account.id)
    return TableEnvelope(message="Table created successfully", table=table)


@router.put("/{table_id}", response_model=TableEnvelope)
def update_table(
    table_id: int,
    body: TableUpdate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> TableEnvelope:
    table = TableService(db).update(table_id, body.model_dump(exclude_unset=True), account.id)
    return TableEnvelope(message="Table updated successfully", table=table)


@router.delete("/{table_id}", response_model=MessageResponse)
def delete_table(
    table_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Remove a table. Its orders and reservations stay, unlinked."""
    TableService(db).delete(table_id, account.id)
    return MessageResponse(message="Table deleted successfully")
