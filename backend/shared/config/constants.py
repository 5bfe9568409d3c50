"""
Centralized constants for the backend application.
Avoids magic strings and repeated constants.

Usage:
    from shared.config.constants import OrderStatus, TableStatus, validate_order_transition

    if status == OrderStatus.COMPLETED:
        ...
"""

from enum import Enum
from typing import Any, Final


# =============================================================================
# Order Lifecycle
# =============================================================================


class OrderStatus(str, Enum):
    """Order status values, in lifecycle order."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# The forward path every order follows; CANCELLED branches off it
ORDER_PROGRESSION: Final[tuple[OrderStatus, ...]] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.SERVED,
    OrderStatus.COMPLETED,
)

TERMINAL_ORDER_STATUSES: Final[frozenset[OrderStatus]] = frozenset({
    OrderStatus.COMPLETED,
    OrderStatus.CANCELLED,
})

ACTIVE_ORDER_STATUSES: Final[frozenset[OrderStatus]] = frozenset(
    set(OrderStatus) - TERMINAL_ORDER_STATUSES
)


def _build_order_transitions() -> dict[OrderStatus, frozenset[OrderStatus]]:
    # A non-terminal order may move to any later step, or be cancelled.
    transitions: dict[OrderStatus, frozenset[OrderStatus]] = {}
    for index, status in enumerate(ORDER_PROGRESSION):
        if status in TERMINAL_ORDER_STATUSES:
            transitions[status] = frozenset()
        else:
            forward = set(ORDER_PROGRESSION[index + 1:])
            transitions[status] = frozenset(forward | {OrderStatus.CANCELLED})
    transitions[OrderStatus.CANCELLED] = frozenset()
    return transitions


ORDER_TRANSITIONS: Final[dict[OrderStatus, frozenset[OrderStatus]]] = _build_order_transitions()


def validate_order_transition(current: OrderStatus | str, target: OrderStatus | str) -> bool:
    """
    Check whether an order may move from `current` to `target`.

    Staying in the same status is always allowed (no-op).
    """
    current = OrderStatus(current)
    target = OrderStatus(target)
    if current == target:
        return True
    return target in ORDER_TRANSITIONS[current]


class OrderType:
    """Order type constants."""

    DINE_IN: Final[str] = "dine-in"
    TAKEOUT: Final[str] = "takeout"
    DELIVERY: Final[str] = "delivery"

    ALL: Final[frozenset[str]] = frozenset({DINE_IN, TAKEOUT, DELIVERY})


# =============================================================================
# Tables and Reservations
# =============================================================================


class TableStatus(str, Enum):
    """Floor status of a table."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"
    NEEDS_ATTENTION = "needs_attention"
    RESERVED = "reserved"
    CLEANING = "cleaning"


class ReservationStatus(str, Enum):
    """Reservation status values."""

    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


DEFAULT_RESERVATION_MINUTES: Final[int] = 120

# Reservations shown with each table on the floor plan
UPCOMING_RESERVATION_WINDOW_HOURS: Final[int] = 24


# =============================================================================
# Inventory and Recipes
# =============================================================================


class StockStatus:
    """Derived stock level labels."""

    LOW: Final[str] = "low"
    GOOD: Final[str] = "good"


def is_low_stock(current_stock: float, min_stock: float) -> bool:
    """An item is low on stock when it is at or below its minimum."""
    return current_stock <= min_stock


class RecipeDifficulty(str, Enum):
    """Recipe difficulty values."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# =============================================================================
# Subscriptions
# =============================================================================


class SubscriptionPlan(str, Enum):
    """Subscription plan identifiers."""

    FREE = "free"
    BASIC = "basic"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class SubscriptionStatus:
    """Subscription status constants."""

    ACTIVE: Final[str] = "active"
    INACTIVE: Final[str] = "inactive"
    CANCELLED: Final[str] = "cancelled"


PLAN_HIERARCHY: Final[dict[str, int]] = {
    SubscriptionPlan.FREE.value: 0,
    SubscriptionPlan.BASIC.value: 1,
    SubscriptionPlan.PRO.value: 2,
    SubscriptionPlan.ENTERPRISE.value: 3,
}

# -1 means unlimited
UNLIMITED: Final[int] = -1

SUBSCRIPTION_PLANS: Final[dict[str, dict[str, Any]]] = {
    SubscriptionPlan.FREE.value: {
        "name": "Free",
        "price": 0,
        "features": ["Up to 50 recipes", "Basic order management", "Simple inventory tracking"],
        "limits": {"recipes": 50, "tables": 10, "orders": 100},
    },
    SubscriptionPlan.BASIC.value: {
        "name": "Basic",
        "price": 29,
        "features": ["Up to 200 recipes", "Advanced order management", "Inventory alerts", "Basic analytics"],
        "limits": {"recipes": 200, "tables": 25, "orders": 1000},
    },
    SubscriptionPlan.PRO.value: {
        "name": "Pro",
        "price": 79,
        "features": ["Unlimited recipes", "Full order management", "Advanced inventory", "Detailed analytics", "Multi-location support"],
        "limits": {"recipes": UNLIMITED, "tables": 100, "orders": UNLIMITED},
    },
    SubscriptionPlan.ENTERPRISE.value: {
        "name": "Enterprise",
        "price": 199,
        "features": ["Everything in Pro", "Custom integrations", "Priority support", "Advanced reporting", "API access"],
        "limits": {"recipes": UNLIMITED, "tables": UNLIMITED, "orders": UNLIMITED},
    },
}


def plan_meets(current_plan: str, required_plan: str) -> bool:
    """True when `current_plan` is at or above `required_plan` in the hierarchy."""
    return PLAN_HIERARCHY.get(current_plan, 0) >= PLAN_HIERARCHY[required_plan]


def plan_limit(plan: str, resource: str) -> int:
    """Limit for a resource on a plan; unknown plans get the free tier."""
    details = SUBSCRIPTION_PLANS.get(plan, SUBSCRIPTION_PLANS[SubscriptionPlan.FREE.value])
    return details["limits"][resource]


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    MIN_PASSWORD_LENGTH: Final[int] = 6

    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 10
    MAX_PAGE_SIZE: Final[int] = 100


class ErrorMessages:
    """Standardized client-facing error messages."""

    # Auth errors
    TOKEN_REQUIRED: Final[str] = "Access token required"
    INVALID_TOKEN: Final[str] = "Invalid or expired token"
    ACCOUNT_INACTIVE: Final[str] = "User not found or subscription inactive"
    SUBSCRIPTION_EXPIRED: Final[str] = "Subscription expired"
    UPGRADE_REQUIRED: Final[str] = "Upgrade required"
    USER_EXISTS: Final[str] = "User already exists"
    INVALID_CREDENTIALS: Final[str] = "Invalid credentials"
    WRONG_PASSWORD: Final[str] = "Current password is incorrect"

    # Domain errors
    TABLE_NUMBER_EXISTS: Final[str] = "Table number already exists"
    INVALID_PLAN: Final[str] = "Invalid subscription plan"

    # Generic
    VALIDATION_FAILED: Final[str] = "Validation failed"
    INTERNAL_ERROR: Final[str] = "Internal server error"
    RATE_LIMIT_EXCEEDED: Final[str] = "Too many requests. Please try again later."
