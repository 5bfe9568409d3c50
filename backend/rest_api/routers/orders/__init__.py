"""
Order routers - /api/orders/*
Order entry, status lifecycle and order analytics.
"""

from .routes import router

__all__ = ["router"]
