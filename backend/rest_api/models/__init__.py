"""
SQLAlchemy ORM Models Package.

- base: Base class, TimestampMixin, SoftDeleteMixin
- types: LineItemList column type
- user: User (the tenant account)
- table: Table, Reservation
- order: Order
- inventory: InventoryItem, Supplier
- recipe: Recipe
"""

from .base import Base, TimestampMixin, SoftDeleteMixin, utc_now, as_utc
from .user import User
from .table import Table, Reservation
from .order import Order
from .inventory import InventoryItem, Supplier
from .recipe import Recipe

__all__ = [
    "Base",
    "TimestampMixin",
    "SoftDeleteMixin",
    "utc_now",
    "as_utc",
    "User",
    "Table",
    "Reservation",
    "Order",
    "InventoryItem",
    "Supplier",
    "Recipe",
]
