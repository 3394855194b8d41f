"""Recipe catalog loading.

The catalog is a JSON array of recipe objects. It is read fresh for each
recommendation request so edits to the file take effect without a restart.
"""

import json
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError as PydanticValidationError

from core.config import AppConfig
from core.exceptions import StorageError, ValidationError
from core.logger import get_logger
from domain.models import Recipe

logger = get_logger("data.recipe_catalog")


def load_recipe_catalog(path: Union[str, Path]) -> List[Recipe]:
    """Load and validate every recipe in the catalog at ``path``.

    Args:
        path: Location of the JSON catalog.

    Returns:
        Recipes in file order.

    Raises:
        StorageError: If the file is missing, unreadable, not a JSON array,
            or holds a recipe that fails validation.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise StorageError(f"Recipe catalog not found: {path}", operation="load_catalog", entity="recipes") from exc
    except (OSError, ValueError) as exc:
        raise StorageError(f"Cannot read recipe catalog {path}: {exc}",
                           operation="load_catalog", entity="recipes") from exc

    if not isinstance(raw, list):
        raise StorageError("Recipe catalog must be a JSON array", operation="load_catalog", entity="recipes")

    recipes = []
    for index, item in enumerate(raw):
        try:
            recipe = Recipe.model_validate(item)
            recipe.validate_fields()
        except (PydanticValidationError, ValidationError) as exc:
            raise StorageError(f"Invalid recipe at position {index} in {path}: {exc}",
                               operation="load_catalog", entity="recipes") from exc
        recipes.append(recipe)

    logger.info("Loaded %s recipes from %s", len(recipes), path)
    return recipes


class RecipeCatalogLoader:
    """Callable loading the catalog configured in `AppConfig.catalog_path`."""

    def __init__(self, config: AppConfig):
        self.path = Path(config.catalog_path)

    def __call__(self) -> List[Recipe]:
        return load_recipe_catalog(self.path)
