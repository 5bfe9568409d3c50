"""
Authentication routers - /api/auth/*
Handles registration, login and account info.
"""

from .routes import router

__all__ = ["router"]
