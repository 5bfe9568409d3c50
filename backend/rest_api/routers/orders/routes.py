"""
Orders router.
Order entry, listing and the status lifecycle.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.routers._common import Pagination, current_account, get_pagination
from rest_api.services.domain import OrderService
from shared.config.constants import OrderStatus
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    MessageResponse,
    OrderAnalytics,
    OrderCreate,
    OrderEnvelope,
    OrderList,
    OrderStatusUpdate,
    OrderType,
    OrderUpdate,
)


router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=OrderList)
def list_orders(
    status_filter: OrderStatus | None = Query(default=None, alias="status"),
    on_date: date | None = Query(default=None, alias="date", description="YYYY-MM-DD"),
    table_id: int | None = Query(default=None, alias="tableId"),
    order_type: OrderType | None = Query(default=None, alias="orderType"),
    pagination: Pagination = Depends(get_pagination),
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> OrderList:
    """
    List orders, newest first.

    Each order carries its table summary (or null) and decoded line items.
    """
    orders, total = OrderService(db).list_orders(
        account.id,
        status=status_filter.value if status_filter else None,
        on_date=on_date,
        table_id=table_id,
        order_type=order_type,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return OrderList(orders=orders, pagination=pagination.meta(total))


# Static path before /{order_id}
@router.get("/analytics", response_model=OrderAnalytics)
def order_analytics(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> OrderAnalytics:
    """Order count, revenue, average value and per-status counts for an inclusive date range."""
    return OrderService(db).analytics(account.id, start_date=start_date, end_date=end_date)


@router.get("/{order_id}", response_model=OrderEnvelope)
def get_order(
    order_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> OrderEnvelope:
    return OrderEnvelope(order=OrderService(db).get_order(order_id, account.id))


@router.post("", response_model=OrderEnvelope, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> OrderEnvelope:
    """
    Create a pending order.

    When tableId is given the table becomes occupied in the same transaction.
    """
    order = OrderService(db).create(body.model_dump(), account.id)
    return OrderEnvelope(message="Order created successfully", order=order)


@router.put("/{order_id}", response_model=OrderEnvelope)
def update_order(
    order_id: int,
    body: OrderUpdate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> OrderEnvelope:
    order = OrderService(db).update(order_id, body.model_dump(exclude_unset=True), account.id)
    return OrderEnvelope(message="Order updated successfully", order=order)


@router.patch("/{order_id}/status", response_model=OrderEnvelope)
def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> OrderEnvelope:
    """
    Move the order along its lifecycle.

    Sending the current status again is a no-op. Completing the order
    frees its table in the same transaction.
    """
    order = OrderService(db).update_status(order_id, body.status, account.id)
    return OrderEnvelope(message="Order status updated successfully", order=order)


@router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(
    order_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> MessageResponse:
    OrderService(db).delete(order_id, account.id)
    return MessageResponse(message="Order deleted successfully")
