"""
Inventory router.
Stock items, low-stock alerts and suppliers.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.routers._common import Pagination, current_account, get_pagination
from rest_api.services.domain import InventoryService, SupplierService
from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    InventoryItemCreate,
    InventoryItemEnvelope,
    InventoryItemList,
    InventoryItemUpdate,
    MessageResponse,
    SupplierCreate,
    SupplierEnvelope,
    SupplierList,
    SupplierUpdate,
)


router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=InventoryItemList)
def list_items(
    category: str | None = Query(default=None),
    low_stock: bool = Query(default=False, alias="lowStock"),
    search: str | None = Query(default=None, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    pagination: Pagination = Depends(get_pagination),
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> InventoryItemList:
    """
    List stock items, most recently changed first.

    Every item carries isLowStock and status, derived on this read.
    """
    items, total = InventoryService(db).list_items(
        account.id,
        category=category,
        low_stock=low_stock,
        search=search,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return InventoryItemList(items=items, pagination=pagination.meta(total))


# =============================================================================
# Alerts (declared before /{item_id})
# =============================================================================


@router.get("/alerts", response_model=InventoryItemList)
@router.get("/alerts/low-stock", response_model=InventoryItemList)
def low_stock_alerts(
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> InventoryItemList:
    """Items at or below their minimum, largest shortfall first."""
    return InventoryItemList(items=InventoryService(db).list_alerts(account.id))


# =============================================================================
# Suppliers (declared before /{item_id})
# =============================================================================


@router.get("/suppliers", response_model=SupplierList)
def list_suppliers(
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> SupplierList:
    return SupplierList(suppliers=SupplierService(db).list_suppliers(account.id))


@router.get("/suppliers/{supplier_id}", response_model=SupplierEnvelope)
def get_supplier(
    supplier_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> SupplierEnvelope:
    return SupplierEnvelope(supplier=SupplierService(db).get_by_id(supplier_id, account.id))


@router.post("/suppliers", response_model=SupplierEnvelope, status_code=status.HTTP_201_CREATED)
def create_supplier(
    body: SupplierCreate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> SupplierEnvelope:
    supplier = SupplierService(db).create(body.model_dump(), account.id)
    return SupplierEnvelope(message="Supplier created successfully", supplier=supplier)


@router.put("/suppliers/{supplier_id}", response_model=SupplierEnvelope)
def update_supplier(
    supplier_id: int,
    body: SupplierUpdate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> SupplierEnvelope:
    supplier = SupplierService(db).update(
        supplier_id, body.model_dump(exclude_unset=True), account.id
    )
    return SupplierEnvelope(message="Supplier updated successfully", supplier=supplier)


@router.delete("/suppliers/{supplier_id}", response_model=MessageResponse)
def delete_supplier(
    supplier_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Deactivate a supplier. It disappears from lists and lookups."""
    SupplierService(db).delete(supplier_id, account.id)
    return MessageResponse(message="Supplier deleted successfully")


# =============================================================================
# Items
# =============================================================================


@router.get("/{item_id}", response_model=InventoryItemEnvelope)
def get_item(
    item_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> InventoryItemEnvelope:
    return InventoryItemEnvelope(item=InventoryService(db).get_by_id(item_id, account.id))


@router.post("", response_model=InventoryItemEnvelope, status_code=status.HTTP_201_CREATED)
def create_item(
    body: InventoryItemCreate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> InventoryItemEnvelope:
    item = InventoryService(db).create(body.model_dump(), account.id)
    return InventoryItemEnvelope(message="Inventory item created successfully", item=item)


@router.put("/{item_id}", response_model=InventoryItemEnvelope)
def update_item(
    item_id: int,
    body: InventoryItemUpdate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> InventoryItemEnvelope:
    """Partial update. Stock may go negative; low-stock status follows on the next read."""
    item = InventoryService(db).update(item_id, body.model_dump(exclude_unset=True), account.id)
    return InventoryItemEnvelope(message="Inventory item updated successfully", item=item)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> MessageResponse:
    InventoryService(db).delete(item_id, account.id)
    return MessageResponse(message="Inventory item deleted successfully")
