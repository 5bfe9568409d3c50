"""
Repository Pattern for database access.

Provides the data access layer between services and models, with
tenant isolation built into every query.

Usage:
    from rest_api.services.crud.repository import TenantRepository

    table_repo = TenantRepository(Table, db)

    tables = table_repo.find_all(tenant_id=1, order_by=Table.table_number)
    table = table_repo.find_by_id(42, tenant_id=1)
    busy = table_repo.count(1, where=[Table.status != "available"])
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import func, select, exists as sql_exists
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from rest_api.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Common database operations for a model.

    Used directly only for the account table; everything a tenant owns
    goes through TenantRepository.
    """

    def __init__(self, model: type[ModelT], session: Session):
        self._model = model
        self._session = session

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    def _base_query(self) -> Select:
        return select(self._model)

    def _apply_active_filter(self, query: Select, include_inactive: bool) -> Select:
        """Hide soft-deleted rows for models that have is_active."""
        if hasattr(self._model, "is_active") and not include_inactive:
            query = query.where(self._model.is_active.is_(True))
        return query

    @staticmethod
    def _apply_where(query: Select, where: Sequence[Any] | None) -> Select:
        if where:
            query = query.where(*where)
        return query

    @staticmethod
    def _apply_window(
        query: Select,
        order_by: Any | None,
        limit: int | None,
        offset: int | None,
    ) -> Select:
        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                query = query.order_by(*order_by)
            else:
                query = query.order_by(order_by)
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query

    def find_by_id(self, entity_id: int, *, include_inactive: bool = False) -> ModelT | None:
        query = self._base_query().where(self._model.id == entity_id)
        query = self._apply_active_filter(query, include_inactive)
        return self._session.scalar(query)

    def find_one(self, *where: Any) -> ModelT | None:
        """First row matching the given clauses."""
        return self._session.scalar(self._base_query().where(*where).limit(1))

    def add(self, entity: ModelT) -> ModelT:
        """Add entity to session (not committed)."""
        self._session.add(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        """Delete entity from session (not committed)."""
        self._session.delete(entity)

    def refresh(self, entity: ModelT) -> ModelT:
        """Refresh entity from database."""
        self._session.refresh(entity)
        return entity


class TenantRepository(BaseRepository[ModelT]):
    """
    Repository with automatic multi-tenant isolation.

    All queries are filtered by tenant_id. Extra `where` clauses narrow
    the result further but can never widen it past the tenant.
    The model must have a `tenant_id` column.
    """

    def _tenant_query(self, tenant_id: int) -> Select:
        if not hasattr(self._model, "tenant_id"):
            raise AttributeError(
                f"Model {self._model.__name__} does not have tenant_id column. "
                "Use BaseRepository instead."
            )
        return self._base_query().where(self._model.tenant_id == tenant_id)

    def find_by_id(
        self,
        entity_id: int,
        tenant_id: int,
        *,
        options: list[Any] | None = None,
        include_inactive: bool = False,
    ) -> ModelT | None:
        """
        Find entity by ID within tenant scope.

        Returns:
            Entity, or None if it does not exist or belongs to another tenant.
        """
        query = self._tenant_query(tenant_id).where(self._model.id == entity_id)
        query = self._apply_active_filter(query, include_inactive)
        if options:
            query = query.options(*options)
        return self._session.scalar(query)

    def find_all(
        self,
        tenant_id: int,
        *,
        where: Sequence[Any] | None = None,
        options: list[Any] | None = None,
        include_inactive: bool = False,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """
        Find entities within tenant scope.

        Args:
            tenant_id: The tenant ID for isolation.
            where: Additional filter clauses.
            options: SQLAlchemy loader options.
            include_inactive: Include soft-deleted entities.
            limit: Maximum results.
            offset: Skip count.
            order_by: Order expression or list of expressions.
        """
        query = self._tenant_query(tenant_id)
        query = self._apply_active_filter(query, include_inactive)
        query = self._apply_where(query, where)
        if options:
            query = query.options(*options)
        query = self._apply_window(query, order_by, limit, offset)
        return self._session.scalars(query).all()

    def count(
        self,
        tenant_id: int,
        *,
        where: Sequence[Any] | None = None,
        include_inactive: bool = False,
    ) -> int:
        """Count entities within tenant scope."""
        query = (
            select(func.count())
            .select_from(self._model)
            .where(self._model.tenant_id == tenant_id)
        )
        if hasattr(self._model, "is_active") and not include_inactive:
            query = query.where(self._model.is_active.is_(True))
        query = self._apply_where(query, where)
        return self._session.scalar(query) or 0

    def exists(self, entity_id: int, tenant_id: int) -> bool:
        """Check if entity exists within tenant scope."""
        query = select(
            sql_exists().where(
                self._model.id == entity_id,
                self._model.tenant_id == tenant_id,
            )
        )
        return self._session.scalar(query) or False
