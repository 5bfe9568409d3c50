"""
Subscription routers - /api/subscriptions/*
"""

from .routes import router

__all__ = ["router"]
