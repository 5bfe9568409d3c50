"""
Recipe routers - /api/recipes/*
"""

from .routes import router

__all__ = ["router"]
