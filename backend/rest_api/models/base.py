"""
Base class and mixins for all SQLAlchemy ORM models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# BIGINT primary keys on server databases; SQLite only autoincrements INTEGER
BigIntPK = BigInteger().with_variant(Integer, "sqlite")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """
    Normalize a datetime to UTC.

    All timestamps are written in UTC, so a missing offset (as read back
    from SQLite) means UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class TimestampMixin:
    """
    Creation and modification timestamps.

    Fields added:
    - created_at: set on insert
    - updated_at: set on insert and refreshed on every update
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=True
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


class SoftDeleteMixin(TimestampMixin):
    """
    Timestamps plus a soft delete flag.

    Fields added:
    - is_active: False once deleted; repositories hide inactive rows by default
    - deleted_at: when the row was soft deleted
    """

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def soft_delete(self) -> None:
        self.is_active = False
        self.deleted_at = utc_now()

    def __repr__(self) -> str:
        state = "active" if self.is_active else "deleted"
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)}, {state})>"
