"""Tests for the JSON recipe catalog and the CSV importer."""
import json
from pathlib import Path

import pytest

from core.config import DEFAULT_CATALOG_PATH
from core.exceptions import ParseError, StorageError
from data.ingest_recipes import parse_ingredients, parse_recipes_csv, seed_recipes, seed_recipes_from_csv
from data.recipe_catalog import RecipeCatalogLoader, load_recipe_catalog

FIXTURE_CSV = Path(__file__).resolve().parent.parent / "data" / "fixtures" / "sample_recipes.csv"


def test_bundled_catalog_is_valid():
    recipes = load_recipe_catalog(DEFAULT_CATALOG_PATH)
    assert len(recipes) >= 12
    assert {r.meal_type for r in recipes} == {"breakfast", "lunch", "dinner", "snack"}
    assert len({r.id for r in recipes}) == len(recipes)


def test_loader_uses_configured_path(config):
    assert [r.id for r in RecipeCatalogLoader(config)()] == [r.id for r in load_recipe_catalog(config.catalog_path)]


def test_missing_catalog_raises_storage_error(tmp_path):
    with pytest.raises(StorageError, match="not found"):
        load_recipe_catalog(tmp_path / "missing.json")


@pytest.mark.parametrize("content", [
    "{not json",
    json.dumps({"title": "not a list"}),
    json.dumps([{"title": "No nutrition", "preparation_time": 5, "difficulty_level": "easy", "meal_type": "lunch"}]),
])
def test_malformed_catalog_raises_storage_error(tmp_path, content):
    path = tmp_path / "catalog.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StorageError):
        load_recipe_catalog(path)


def test_catalog_entry_failing_validation_raises_storage_error(tmp_path):
    recipe = json.loads(DEFAULT_CATALOG_PATH.read_text(encoding="utf-8"))[0]
    recipe["meal_type"] = "brunch"
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([recipe]), encoding="utf-8")
    with pytest.raises(StorageError, match="position 0"):
        load_recipe_catalog(path)


def test_parse_ingredients():
    parsed = parse_ingredients("rolled oats:50:g; banana:1:pcs;salt")
    assert [(i.name, i.amount, i.unit) for i in parsed] == [
        ("rolled oats", 50.0, "g"), ("banana", 1.0, "pcs"), ("salt", 1.0, "pcs"),
    ]
    with pytest.raises(ParseError):
        parse_ingredients("egg:two:pcs")


def test_parse_recipes_csv():
    recipes = parse_recipes_csv(str(FIXTURE_CSV))
    assert [r.id for r in recipes] == ["csv-banana-pancakes", "csv-chickpea-curry", "csv-turkey-bowl"]
    curry = recipes[1]
    assert curry.tags == ["vegetarian", "vegan"]
    assert curry.seasonal is True
    assert curry.nutritional_info_per_serving.fiber == 13
    assert recipes[2].cuisine_type is None


def test_seed_recipes_is_idempotent(store):
    added = seed_recipes_from_csv(str(FIXTURE_CSV), store)
    assert added == 3
    assert seed_recipes_from_csv(str(FIXTURE_CSV), store) == 0
    assert len(store.search_recipes()) == 3

    assert seed_recipes(store, load_recipe_catalog(DEFAULT_CATALOG_PATH)) > 0
    assert store.get_recipe_by_id("csv-turkey-bowl").title == "Turkey Rice Bowl"
