"""
Floor models: Table, Reservation.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import (
    DEFAULT_RESERVATION_MINUTES,
    ReservationStatus,
    TableStatus,
)
from .base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from .order import Order
    from .user import User


class Table(TimestampMixin, Base):
    """
    Physical table on a restaurant's floor plan.
    Table numbers are unique per tenant, enforced by the database.
    """

    # "table" is a reserved SQL keyword
    __tablename__ = "restaurant_table"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    table_number: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    location: Mapped[Optional[str]] = mapped_column(Text)  # "Main Hall", "Patio"
    x_position: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    y_position: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default=TableStatus.AVAILABLE.value, index=True
    )  # available, occupied, needs_attention, reserved, cleaning

    __table_args__ = (
        UniqueConstraint("tenant_id", "table_number", name="uq_table_tenant_number"),
        Index("ix_table_tenant_status", "tenant_id", "status"),
    )

    owner: Mapped["User"] = relationship(back_populates="tables")
    orders: Mapped[list["Order"]] = relationship(back_populates="table", passive_deletes=True)
    reservations: Mapped[list["Reservation"]] = relationship(
        back_populates="table", passive_deletes=True
    )


class Reservation(TimestampMixin, Base):
    """
    Booking for a party, optionally tied to a table.
    Creating one does not change the table's floor status.
    """

    __tablename__ = "reservation"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    table_id: Mapped[Optional[int]] = mapped_column(
        BigIntPK, ForeignKey("restaurant_table.id", ondelete="SET NULL"), nullable=True, index=True
    )
    customer_name: Mapped[str] = mapped_column(Text, nullable=False)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(50))
    customer_email: Mapped[Optional[str]] = mapped_column(String(255))
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    reservation_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_RESERVATION_MINUTES
    )
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default=ReservationStatus.CONFIRMED.value
    )
    special_requests: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        Index("ix_reservation_tenant_date", "tenant_id", "reservation_date"),
    )

    table: Mapped[Optional["Table"]] = relationship(back_populates="reservations")
