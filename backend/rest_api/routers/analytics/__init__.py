"""
Analytics routers - /api/analytics/*
Dashboard requires the basic plan or above.
"""

from .routes import router

__all__ = ["router"]
