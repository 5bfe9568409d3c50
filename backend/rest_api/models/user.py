"""
Account model: User.

Each User is one restaurant. Every other model points at it through
`tenant_id`, which makes the account the tenant boundary.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import SubscriptionPlan, SubscriptionStatus
from .base import Base, BigIntPK, TimestampMixin

if TYPE_CHECKING:
    from .table import Table


class User(TimestampMixin, Base):
    """
    Restaurant owner account and subscription state.
    Accounts are never deleted.
    """

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # bcrypt hash
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    restaurant_name: Mapped[str] = mapped_column(Text, nullable=False)
    restaurant_address: Mapped[Optional[str]] = mapped_column(Text)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    role: Mapped[str] = mapped_column(String(30), default="owner", nullable=False)

    subscription_plan: Mapped[str] = mapped_column(
        String(30), default=SubscriptionPlan.FREE.value, nullable=False
    )
    subscription_status: Mapped[str] = mapped_column(
        String(30), default=SubscriptionStatus.ACTIVE, nullable=False
    )
    subscription_expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    tables: Mapped[list["Table"]] = relationship(back_populates="owner")
