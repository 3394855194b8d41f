"""Recipe endpoints."""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from core.exceptions import NotFoundError
from core.logger import get_logger
from database.deps import get_store
from database.store import DietStore
from domain.models import Recipe

logger = get_logger("api.recipes")
router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("", response_model=List[Recipe])
def search_recipes(
    query: Optional[str] = None,
    tags: Optional[List[str]] = Query(None, description="Every tag must match"),
    exclude_ingredients: Optional[List[str]] = Query(None, description="Recipes using any of these are dropped"),
    max_preparation_time: Optional[int] = Query(None, gt=0),
    difficulty_level: Optional[str] = None,
    meal_type: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    store: DietStore = Depends(get_store),
):
    """Search stored recipes, ordered by title."""
    recipes = store.search_recipes(
        query=query,
        tags=tags,
        exclude_ingredients=exclude_ingredients,
        max_preparation_time=max_preparation_time,
        difficulty_level=difficulty_level,
        meal_type=meal_type,
        limit=limit,
        offset=offset,
    )
    logger.debug("Recipe search query=%r tags=%s matched %s", query, tags, len(recipes))
    return recipes


@router.get("/{recipe_id}", response_model=Recipe)
def get_recipe(recipe_id: str, store: DietStore = Depends(get_store)):
    """Return one stored recipe.

    Raises:
        NotFoundError: If no recipe has ``recipe_id``.
    """
    recipe = store.get_recipe_by_id(recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe", recipe_id)
    return recipe
