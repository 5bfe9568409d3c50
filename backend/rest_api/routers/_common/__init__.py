"""
Common utilities shared across routers.
"""

from .dependencies import client_ip, current_account, require_plan
from .pagination import Pagination, get_pagination

__all__ = [
    "client_ip",
    "current_account",
    "require_plan",
    "Pagination",
    "get_pagination",
]
