"""
Inventory models: InventoryItem, Supplier.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, BigIntPK, SoftDeleteMixin, TimestampMixin


class InventoryItem(TimestampMixin, Base):
    """
    Stock of one ingredient or supply.

    Whether an item is low on stock is computed from current_stock and
    min_stock on every read and is never stored.
    """

    __tablename__ = "inventory_item"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100), index=True)
    current_stock: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    min_stock: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    cost_per_unit: Mapped[Optional[float]] = mapped_column(Float)
    supplier: Mapped[Optional[str]] = mapped_column(Text)
    supplier_contact: Mapped[Optional[str]] = mapped_column(Text)
    last_restocked: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    expiry_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    location: Mapped[Optional[str]] = mapped_column(Text)
    notes: Mapped[Optional[str]] = mapped_column(Text)


class Supplier(SoftDeleteMixin, Base):
    """Vendor an inventory item is bought from."""

    __tablename__ = "supplier"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    contact_person: Mapped[Optional[str]] = mapped_column(Text)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    address: Mapped[Optional[str]] = mapped_column(Text)
    payment_terms: Mapped[Optional[str]] = mapped_column(Text)  # "Net 30"
    delivery_schedule: Mapped[Optional[str]] = mapped_column(Text)  # "Mon, Thu"
    notes: Mapped[Optional[str]] = mapped_column(Text)
