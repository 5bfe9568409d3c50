"""
Data access helpers shared by the domain services.
"""

from .repository import BaseRepository, TenantRepository

__all__ = ["BaseRepository", "TenantRepository"]
