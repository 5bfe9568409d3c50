"""
Order model: Order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import OrderStatus, OrderType
from shared.utils.schemas import OrderLineItem
from .base import Base, BigIntPK, TimestampMixin
from .types import LineItemList

if TYPE_CHECKING:
    from .table import Table


class Order(TimestampMixin, Base):
    """
    A customer order with its lines and amounts.

    Lines are kept on the order as a JSON document (see LineItemList).
    Status moves along ORDER_TRANSITIONS; OrderService owns the table
    side effects of those moves.
    """

    # "order" is a reserved SQL keyword
    __tablename__ = "customer_order"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    table_id: Mapped[Optional[int]] = mapped_column(
        BigIntPK, ForeignKey("restaurant_table.id", ondelete="SET NULL"), nullable=True, index=True
    )
    customer_name: Mapped[Optional[str]] = mapped_column(Text)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(50))
    order_type: Mapped[str] = mapped_column(String(20), nullable=False, default=OrderType.DINE_IN)
    items: Mapped[list[OrderLineItem]] = mapped_column(LineItemList, nullable=False, default=list)
    subtotal: Mapped[float] = mapped_column(Float, nullable=False)
    tax: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    tip: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    total: Mapped[float] = mapped_column(Float, nullable=False)
    special_instructions: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrderStatus.PENDING.value, index=True
    )

    __table_args__ = (
        Index("ix_order_tenant_created", "tenant_id", "created_at"),
        Index("ix_order_tenant_status", "tenant_id", "status"),
    )

    table: Mapped[Optional["Table"]] = relationship(back_populates="orders")
