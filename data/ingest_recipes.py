"""Utilities to ingest recipe CSV files into the store.

This module provides:
- parse_recipes_csv(csv_path): returns a list of validated `Recipe` objects
- seed_recipes(store, recipes): idempotently inserts recipes into the store

Expected columns: `title`, `meal_type`, `difficulty_level`,
`preparation_time` and the nutrition columns `calories`, `protein`,
`carbs`, `fat`, `fiber`. Optional columns: `id`, `description`,
`cuisine_type`, `seasonal`, `recipe_instructions`, `tags` (separated by
``;``) and `ingredients` (``;``-separated ``name:amount:unit`` cells).
"""
from __future__ import annotations

import math
from typing import List, Optional

import pandas as pd

from core.exceptions import ParseError, ValidationError
from core.logger import get_logger
from database.store import DietStore
from domain.models import NutritionalInfo, Recipe, RecipeIngredient

logger = get_logger("data.ingest_recipes")

NUTRITION_COLUMNS = ("calories", "protein", "carbs", "fat", "fiber")


def _is_blank(val) -> bool:
    if val is None:
        return True
    if isinstance(val, float) and math.isnan(val):
        return True
    return str(val).strip() == ""


def _text(val, default: str = "") -> str:
    return default if _is_blank(val) else str(val).strip()


def _truthy(val) -> bool:
    """Return True for common truthy CSV cell values."""
    if _is_blank(val):
        return False
    if isinstance(val, (bool, int, float)):
        return float(val) >= 0.5
    return str(val).strip().lower() in ("1", "true", "yes", "y")


def parse_tags(raw) -> List[str]:
    if _is_blank(raw):
        return []
    return [t.strip() for t in str(raw).split(";") if t.strip()]


def parse_ingredients(raw) -> List[RecipeIngredient]:
    """Parse ``name:amount:unit`` cells separated by ``;``.

    A missing unit defaults to ``pcs``; a missing amount to 1.

    Raises:
        ParseError: If an amount is not numeric.
    """
    if _is_blank(raw):
        return []
    ingredients = []
    for cell in str(raw).split(";"):
        parts = [p.strip() for p in cell.split(":")]
        if not parts[0]:
            continue
        amount_raw = parts[1] if len(parts) > 1 and parts[1] else "1"
        try:
            amount = float(amount_raw)
        except ValueError as exc:
            raise ParseError(f"Invalid ingredient amount '{amount_raw}'", field="ingredients", value=cell) from exc
        unit = parts[2] if len(parts) > 2 and parts[2] else "pcs"
        ingredients.append(RecipeIngredient(name=parts[0], amount=amount, unit=unit))
    return ingredients


def _number(row, column: str) -> float:
    val = row.get(column)
    if _is_blank(val):
        return 0.0
    try:
        return float(val)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Invalid {column} value '{val}'", field=column, value=str(val)) from exc


def parse_recipes_csv(csv_path: str) -> List[Recipe]:
    """Parse the CSV and return validated recipes.

    Rows without a title are skipped. Rows that fail validation are logged
    and skipped; malformed numbers raise.

    Args:
        csv_path: Path to the recipes CSV file.

    Returns:
        List of `Recipe` objects in file order.
    """
    logger.info("Parsing recipes CSV: %s", csv_path)
    df = pd.read_csv(csv_path, encoding="utf-8", dtype=str, keep_default_na=False)
    df = df.rename(columns=lambda s: s.strip())

    recipes = []
    for _, row in df.iterrows():
        title = _text(row.get("title"))
        if not title:
            continue

        fields = dict(
            title=title,
            description=_text(row.get("description")),
            ingredients=parse_ingredients(row.get("ingredients")),
            nutritional_info_per_serving=NutritionalInfo(
                **{column: _number(row, column) for column in NUTRITION_COLUMNS}
            ),
            preparation_time=int(_number(row, "preparation_time")),
            difficulty_level=_text(row.get("difficulty_level"), "medium").lower(),
            meal_type=_text(row.get("meal_type"), "lunch").lower(),
            recipe_instructions=_text(row.get("recipe_instructions")),
            cuisine_type=_text(row.get("cuisine_type")) or None,
            seasonal=_truthy(row.get("seasonal")),
            tags=parse_tags(row.get("tags")),
        )
        recipe_id = _text(row.get("id"))
        if recipe_id:
            fields["id"] = recipe_id
        recipe = Recipe(**fields)

        try:
            recipe.validate_fields()
        except ValidationError as exc:
            logger.warning("Skipping recipe %s: %s", title, exc.message)
            continue
        recipes.append(recipe)

    logger.info("Parsed %s recipes from CSV", len(recipes))
    return recipes


def seed_recipes(store: DietStore, recipes: List[Recipe]) -> int:
    """Idempotently insert ``recipes``; ids already stored are skipped.

    Returns:
        Number of recipes added.
    """
    added = store.save_recipes(recipes)
    logger.info("Seeded %s new recipes into DB", added)
    return added


def seed_recipes_from_csv(csv_path: str, store: DietStore) -> int:
    return seed_recipes(store, parse_recipes_csv(csv_path))


if __name__ == "__main__":
    import argparse

    from core.config import AppConfig
    from database.store import init_store

    p = argparse.ArgumentParser("Seed recipes from CSV into the DB")
    p.add_argument("csv_path", nargs="?", default="data/fixtures/sample_recipes.csv")
    args = p.parse_args()
    store: Optional[DietStore] = init_store(AppConfig.from_env())
    try:
        seed_recipes_from_csv(args.csv_path, store)
    finally:
        store.dispose()
    print("Done")
