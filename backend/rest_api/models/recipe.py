"""
Recipe model: Recipe.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, BigIntPK, SoftDeleteMixin


class Recipe(SoftDeleteMixin, Base):
    """
    Kitchen recipe card.
    Deleting a recipe only deactivates it.
    """

    __tablename__ = "recipe"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(100), nullable=False)  # "main-course", "dessert"
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False)  # easy, medium, hard
    prep_time: Mapped[Optional[int]] = mapped_column(Integer)  # minutes
    cook_time: Mapped[Optional[int]] = mapped_column(Integer)  # minutes
    servings: Mapped[Optional[int]] = mapped_column(Integer)
    cost_per_serving: Mapped[Optional[float]] = mapped_column(Float)
    image_url: Mapped[Optional[str]] = mapped_column(Text)

    ingredients: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    instructions: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    nutritional_info: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("ix_recipe_tenant_category", "tenant_id", "category"),
    )
