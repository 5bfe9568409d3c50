"""
Recipe Service.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from rest_api.models import Recipe
from rest_api.services.base_service import BaseCRUDService
from shared.utils.schemas import RecipeOutput
from shared.utils.validators import LIKE_ESCAPE, contains_pattern


class RecipeService(BaseCRUDService[Recipe, RecipeOutput]):
    """Service for the recipe book. Deleted recipes are hidden, not removed."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Recipe,
            output_schema=RecipeOutput,
            entity_name="Recipe",
            supports_soft_delete=True,
        )

    def list_recipes(
        self,
        tenant_id: int,
        *,
        category: str | None = None,
        difficulty: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[RecipeOutput], int]:
        """Active recipes, newest first, with the unpaged total."""
        where: list[Any] = []
        if category:
            where.append(Recipe.category == category)
        if difficulty:
            where.append(Recipe.difficulty == difficulty)
        if search:
            pattern = contains_pattern(search)
            where.append(
                or_(
                    func.lower(Recipe.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(Recipe.description).like(pattern, escape=LIKE_ESCAPE),
                )
            )

        recipes = self._repo.find_all(
            tenant_id,
            where=where,
            order_by=[Recipe.created_at.desc(), Recipe.id.desc()],
            limit=limit,
            offset=offset,
        )
        total = self._repo.count(tenant_id, where=where)
        return [self.to_output(r) for r in recipes], total
