"""
Base Service Classes.

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Usage:
    from rest_api.services.base_service import BaseCRUDService

    class SupplierService(BaseCRUDService[Supplier, SupplierOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                model=Supplier,
                output_schema=SupplierOutput,
                entity_name="Supplier",
            )
"""

from __future__ import annotations

from typing import Any, Generic, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.services.crud.repository import TenantRepository
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import AppException, DatabaseError, NotFoundError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseService(Generic[ModelT]):
    """
    Base service for domain operations.

    Holds the session and a tenant-scoped repository, and provides a
    single commit point that turns database failures into HTTP errors.
    """

    entity_name: str = "Entity"

    def __init__(self, db: Session, model: Type[ModelT]):
        self._db = db
        self._model = model
        self._repo = TenantRepository(model, db)

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> TenantRepository[ModelT]:
        """Repository for data access."""
        return self._repo

    def get_entity(self, entity_id: int, tenant_id: int, **kwargs: Any) -> ModelT:
        """
        Load an entity inside the tenant or raise 404.

        Raises:
            NotFoundError: If missing or owned by another tenant.
        """
        entity = self._repo.find_by_id(entity_id, tenant_id, **kwargs)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id, tenant_id=tenant_id)
        return entity

    def _commit(self, operation: str, **log_context: Any) -> None:
        """
        Commit everything pending in the session as one unit.

        Raises:
            AppException: From _on_integrity_error for constraint violations.
            DatabaseError: For any other database failure.
        """
        try:
            safe_commit(self._db)
        except IntegrityError as e:
            raise self._on_integrity_error(e, operation, **log_context) from e
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to {operation}",
                error=str(e),
                entity=self.entity_name,
                **log_context,
            )
            raise DatabaseError(operation) from e

    def _drop_null_required(self, data: dict[str, Any]) -> dict[str, Any]:
        """Ignore explicit nulls sent for NOT NULL columns in partial updates."""
        required = {c.key for c in self._model.__table__.columns if not c.nullable}
        return {k: v for k, v in data.items() if not (v is None and k in required)}

    def _on_integrity_error(
        self, error: IntegrityError, operation: str, **log_context: Any
    ) -> AppException:
        """Map a constraint violation to a client error. Override per entity."""
        logger.error(
            f"Integrity error during {operation}",
            error=str(error.orig),
            entity=self.entity_name,
            **log_context,
        )
        return DatabaseError(operation)


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Base service for entities with plain CRUD operations.

    Override the _validate_* hooks for entity rules.
    """

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        *,
        supports_soft_delete: bool = False,
    ):
        super().__init__(db, model)
        self._output_schema = output_schema
        self.entity_name = entity_name
        self._supports_soft_delete = supports_soft_delete

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_by_id(self, entity_id: int, tenant_id: int) -> OutputT:
        """
        Get entity by ID.

        Raises:
            NotFoundError: If entity not found.
        """
        return self.to_output(self.get_entity(entity_id, tenant_id))

    def list_all(
        self,
        tenant_id: int,
        *,
        where: list[Any] | None = None,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> list[OutputT]:
        entities = self._repo.find_all(
            tenant_id,
            where=where,
            limit=limit,
            offset=offset,
            order_by=order_by,
        )
        return [self.to_output(e) for e in entities]

    def count(self, tenant_id: int, *, where: list[Any] | None = None) -> int:
        return self._repo.count(tenant_id, where=where)

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any], tenant_id: int) -> OutputT:
        """
        Create new entity owned by the tenant.

        Raises:
            ValidationError: If data is invalid.
            DatabaseError: If creation fails.
        """
        self._validate_create(data, tenant_id)

        data["tenant_id"] = tenant_id
        entity = self._model(**data)
        self._repo.add(entity)

        self._commit(f"create {self.entity_name.lower()}", tenant_id=tenant_id)
        self._repo.refresh(entity)

        logger.info(f"{self.entity_name} created", entity_id=entity.id, tenant_id=tenant_id)
        return self.to_output(entity)

    def update(self, entity_id: int, data: dict[str, Any], tenant_id: int) -> OutputT:
        """
        Apply a partial update.

        Raises:
            NotFoundError: If entity not found.
            ValidationError: If data is invalid.
            DatabaseError: If update fails.
        """
        entity = self.get_entity(entity_id, tenant_id)
        data = self._drop_null_required(data)
        self._validate_update(entity, data, tenant_id)

        for field_name, value in data.items():
            if hasattr(entity, field_name):
                setattr(entity, field_name, value)

        self._commit(f"update {self.entity_name.lower()}", entity_id=entity_id)
        self._repo.refresh(entity)
        return self.to_output(entity)

    def delete(self, entity_id: int, tenant_id: int) -> None:
        """
        Delete entity (soft delete if supported).

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self.get_entity(entity_id, tenant_id)

        if self._supports_soft_delete:
            entity.soft_delete()
        else:
            self._repo.delete(entity)

        self._commit(f"delete {self.entity_name.lower()}", entity_id=entity_id)
        logger.info(f"{self.entity_name} deleted", entity_id=entity_id, tenant_id=tenant_id)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """Convert entity to output DTO. Override for custom shaping."""
        return self._output_schema.model_validate(entity)

    # =========================================================================
    # Validation Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any], tenant_id: int) -> None:
        pass

    def _validate_update(self, entity: ModelT, data: dict[str, Any], tenant_id: int) -> None:
        pass
