"""
Configuration module: Settings, logging, constants.
"""

from shared.config.settings import settings, get_settings, ConfigurationError
from shared.config.logging import get_logger, setup_logging
from shared.config.constants import (
    OrderStatus,
    TableStatus,
    ReservationStatus,
    SubscriptionPlan,
    Limits,
)

__all__ = [
    # settings
    "settings",
    "get_settings",
    "ConfigurationError",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "OrderStatus",
    "TableStatus",
    "ReservationStatus",
    "SubscriptionPlan",
    "Limits",
]
