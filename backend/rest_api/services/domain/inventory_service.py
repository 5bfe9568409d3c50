"""
Inventory Service.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from rest_api.models import InventoryItem
from rest_api.services.base_service import BaseCRUDService
from shared.utils.schemas import InventoryItemOutput
from shared.utils.validators import LIKE_ESCAPE, contains_pattern


def low_stock_clause() -> Any:
    """SQL form of the low-stock predicate (see is_low_stock)."""
    return InventoryItem.current_stock <= InventoryItem.min_stock


class InventoryService(BaseCRUDService[InventoryItem, InventoryItemOutput]):
    """
    Service for stock items.

    The low-stock flag is never stored. Reads derive it from
    current_stock and min_stock, so any stock change shows up on the next read.
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=InventoryItem,
            output_schema=InventoryItemOutput,
            entity_name="Inventory item",
        )

    def list_items(
        self,
        tenant_id: int,
        *,
        category: str | None = None,
        low_stock: bool = False,
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[InventoryItemOutput], int]:
        """Filtered items, most recently changed first, with the unpaged total."""
        where: list[Any] = []
        if category:
            where.append(InventoryItem.category == category)
        if low_stock:
            where.append(low_stock_clause())
        if search:
            pattern = contains_pattern(search)
            where.append(
                or_(
                    func.lower(InventoryItem.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(InventoryItem.supplier).like(pattern, escape=LIKE_ESCAPE),
                )
            )

        items = self._repo.find_all(
            tenant_id,
            where=where,
            order_by=[InventoryItem.updated_at.desc(), InventoryItem.id.desc()],
            limit=limit,
            offset=offset,
        )
        total = self._repo.count(tenant_id, where=where)
        return [self.to_output(i) for i in items], total

    def list_alerts(self, tenant_id: int) -> list[InventoryItemOutput]:
        """Low-stock items, largest shortfall first."""
        items = self._repo.find_all(
            tenant_id,
            where=[low_stock_clause()],
            order_by=[
                (InventoryItem.current_stock - InventoryItem.min_stock).asc(),
                InventoryItem.name.asc(),
            ],
        )
        return [self.to_output(i) for i in items]

    def count_low_stock(self, tenant_id: int) -> int:
        return self._repo.count(tenant_id, where=[low_stock_clause()])
