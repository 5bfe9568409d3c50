"""
Domain Services - application layer.

Services contain business logic and orchestrate operations.
They use Repositories for data access.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import OrderService

    # In router
    service = OrderService(db)
    order = service.update_status(order_id, "completed", tenant_id)
"""

from .account_service import AccountService
from .analytics_service import AnalyticsService
from .inventory_service import InventoryService
from .order_service import OrderService
from .recipe_service import RecipeService
from .reservation_service import ReservationService
from .subscription_service import SubscriptionService, list_plans
from .supplier_service import SupplierService
from .table_service import TableService

__all__ = [
    "AccountService",
    "AnalyticsService",
    "InventoryService",
    "OrderService",
    "RecipeService",
    "ReservationService",
    "SubscriptionService",
    "SupplierService",
    "TableService",
    "list_plans",
]
