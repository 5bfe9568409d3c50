"""
Supplier Service.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.models import Supplier
from rest_api.services.base_service import BaseCRUDService
from shared.utils.schemas import SupplierOutput


class SupplierService(BaseCRUDService[Supplier, SupplierOutput]):
    """Service for suppliers. Deleting one only deactivates it."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Supplier,
            output_schema=SupplierOutput,
            entity_name="Supplier",
            supports_soft_delete=True,
        )

    def list_suppliers(self, tenant_id: int) -> list[SupplierOutput]:
        return self.list_all(tenant_id, order_by=Supplier.name.asc())
