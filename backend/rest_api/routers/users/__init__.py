"""
User routers - /api/users/*
Profile and password of the signed-in account.
"""

from .routes import router

__all__ = ["router"]
