"""
Standardized Pagination for list endpoints.

Clients page with `?page=&limit=`; responses carry
`pagination: {page, limit, total, pages}`.

Usage:
    from rest_api.routers._common.pagination import Pagination, get_pagination

    @router.get("/orders")
    def list_orders(
        pagination: Pagination = Depends(get_pagination),
        db: Session = Depends(get_db),
    ):
        orders, total = service.list_orders(tenant_id, pagination=pagination)
        return {"orders": orders, "pagination": pagination.meta(total)}
"""

from dataclasses import dataclass

from fastapi import Query

from shared.config.constants import Limits
from shared.utils.schemas import PaginationMeta


@dataclass
class Pagination:
    """
    Page-based pagination parameters.

    Attributes:
        page: 1-indexed page number
        limit: Items per page (1 to max_limit)
        max_limit: Maximum allowed limit
    """

    page: int = 1
    limit: int = Limits.DEFAULT_PAGE_SIZE
    max_limit: int = Limits.MAX_PAGE_SIZE

    def __post_init__(self):
        self.page = max(1, self.page)
        self.limit = min(max(1, self.limit), self.max_limit)

    @property
    def offset(self) -> int:
        """Rows to skip for the current page."""
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> PaginationMeta:
        """Pagination block for a response, given the unpaged total."""
        pages = (total + self.limit - 1) // self.limit
        return PaginationMeta(page=self.page, limit=self.limit, total=total, pages=pages)


def get_pagination(
    page: int = Query(default=1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Maximum number of items per page",
    ),
) -> Pagination:
    """
    FastAPI dependency for pagination.

    Usage:
        @router.get("/items")
        def list_items(pagination: Pagination = Depends(get_pagination)):
            ...
    """
    return Pagination(page=page, limit=limit)
