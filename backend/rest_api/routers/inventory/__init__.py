"""
Inventory routers - /api/inventory/*
Stock items, low-stock alerts and suppliers.
"""

from .routes import router

__all__ = ["router"]
