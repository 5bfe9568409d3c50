"""
Table routers - /api/tables/*
Floor plan tables and reservations.
"""

from .routes import router

__all__ = ["router"]
