"""
Services module for business logic.

- domain/: Application services, one per aggregate. Routers use these.
- crud/: Tenant-scoped repositories the domain services build on.
- base_service.py: Shared create/update/delete template.

Usage:
    from rest_api.services.domain import OrderService
    service = OrderService(db)
    orders, total = service.list_orders(tenant_id, status="pending")
"""
