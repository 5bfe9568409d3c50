"""
Recipes router.
CRUD for the recipe book. Deleting a recipe only deactivates it.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.routers._common import Pagination, current_account, get_pagination
from rest_api.services.domain import RecipeService, SubscriptionService
from shared.config.constants import Limits, RecipeDifficulty
from shared.infrastructure.db import get_db
from shared.utils.schemas import (
    MessageResponse,
    RecipeCreate,
    RecipeEnvelope,
    RecipeList,
    RecipeUpdate,
)


router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("", response_model=RecipeList)
def list_recipes(
    category: str | None = Query(default=None),
    difficulty: RecipeDifficulty | None = Query(default=None),
    search: str | None = Query(default=None, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    pagination: Pagination = Depends(get_pagination),
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> RecipeList:
    recipes, total = RecipeService(db).list_recipes(
        account.id,
        category=category,
        difficulty=difficulty.value if difficulty else None,
        search=search,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return RecipeList(recipes=recipes, pagination=pagination.meta(total))


@router.get("/{recipe_id}", response_model=RecipeEnvelope)
def get_recipe(
    recipe_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> RecipeEnvelope:
    return RecipeEnvelope(recipe=RecipeService(db).get_by_id(recipe_id, account.id))


@router.post("", response_model=RecipeEnvelope, status_code=status.HTTP_201_CREATED)
def create_recipe(
    body: RecipeCreate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> RecipeEnvelope:
    SubscriptionService(db).ensure_capacity(account, "recipes")
    recipe = RecipeService(db).create(body.model_dump(), account.id)
    return RecipeEnvelope(message="Recipe created successfully", recipe=recipe)


@router.put("/{recipe_id}", response_model=RecipeEnvelope)
def update_recipe(
    recipe_id: int,
    body: RecipeUpdate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> RecipeEnvelope:
    recipe = RecipeService(db).update(recipe_id, body.model_dump(exclude_unset=True), account.id)
    return RecipeEnvelope(message="Recipe updated successfully", recipe=recipe)


@router.delete("/{recipe_id}", response_model=MessageResponse)
def delete_recipe(
    recipe_id: int,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
) -> MessageResponse:
    RecipeService(db).delete(recipe_id, account.id)
    return MessageResponse(message="Recipe deleted successfully")
