"""Tests for recipe persistence and search."""
import pytest


@pytest.fixture
def recipes(store, make_recipe):
    store.save_recipe(make_recipe("Tofu Bowl", ingredients=("tofu", "rice", "broccoli"),
                                  tags=["vegetarian", "high_protein"], preparation_time=20,
                                  difficulty_level="easy", meal_type="lunch"))
    store.save_recipe(make_recipe("Chicken Salad", ingredients=("chicken breast", "lettuce"),
                                  tags=["high_protein"], preparation_time=15, meal_type="lunch"))
    store.save_recipe(make_recipe("Almond Porridge", ingredients=("oats", "almond milk"),
                                  tags=["vegetarian"], preparation_time=10,
                                  difficulty_level="easy", meal_type="breakfast"))
    store.save_recipe(make_recipe("Beef Stew", ingredients=("beef", "carrot"),
                                  tags=[], preparation_time=120, difficulty_level="hard",
                                  meal_type="dinner", description="Slow braise, 100% comfort"))
    return store


def titles(results):
    return [r.title for r in results]


def test_recipe_round_trip(store, make_recipe):
    recipe = make_recipe(tags=["vegan"], cuisine_type="thai", seasonal=True)
    store.save_recipe(recipe)
    loaded = store.get_recipe_by_id(recipe.id)
    assert loaded.model_dump(exclude={"created_at", "updated_at"}) == recipe.model_dump(exclude={"created_at", "updated_at"})
    assert store.get_recipe_by_id("missing") is None


def test_search_without_filters_orders_by_title(recipes):
    assert titles(recipes.search_recipes()) == ["Almond Porridge", "Beef Stew", "Chicken Salad", "Tofu Bowl"]


def test_query_matches_title_or_description(recipes):
    assert titles(recipes.search_recipes(query="salad")) == ["Chicken Salad"]
    assert titles(recipes.search_recipes(query="braise")) == ["Beef Stew"]


def test_every_tag_must_match(recipes):
    assert titles(recipes.search_recipes(tags=["vegetarian"])) == ["Almond Porridge", "Tofu Bowl"]
    assert titles(recipes.search_recipes(tags=["vegetarian", "high_protein"])) == ["Tofu Bowl"]


def test_excluded_ingredient_removes_recipe(recipes):
    assert titles(recipes.search_recipes(exclude_ingredients=["almond"])) == ["Beef Stew", "Chicken Salad", "Tofu Bowl"]
    assert titles(recipes.search_recipes(exclude_ingredients=["chicken", "beef"])) == ["Almond Porridge", "Tofu Bowl"]


def test_scalar_filters(recipes):
    assert titles(recipes.search_recipes(max_preparation_time=15)) == ["Almond Porridge", "Chicken Salad"]
    assert titles(recipes.search_recipes(difficulty_level="easy", meal_type="lunch")) == ["Tofu Bowl"]


def test_like_wildcards_are_literal(recipes):
    assert titles(recipes.search_recipes(query="100%")) == ["Beef Stew"]
    assert titles(recipes.search_recipes(query="%")) == ["Beef Stew"]
    assert recipes.search_recipes(query="_") == []


def test_pagination(recipes):
    assert titles(recipes.search_recipes(limit=2)) == ["Almond Porridge", "Beef Stew"]
    assert titles(recipes.search_recipes(limit=2, offset=2)) == ["Chicken Salad", "Tofu Bowl"]


def test_non_ascii_text_is_searchable(store, make_recipe):
    store.save_recipe(make_recipe("番茄炒蛋", ingredients=("番茄", "鸡蛋"), tags=["家常菜"]))
    store.save_recipe(make_recipe("Crème brûlée", ingredients=("crème fraîche",), meal_type="snack"))

    assert titles(store.search_recipes(tags=["家常菜"])) == ["番茄炒蛋"]
    assert titles(store.search_recipes(exclude_ingredients=["鸡蛋"])) == ["Crème brûlée"]
    assert titles(store.search_recipes(query="brûlée")) == ["Crème brûlée"]


def test_save_recipes_skips_known_ids(store, make_recipe):
    batch = [make_recipe("A", id="r-a"), make_recipe("B", id="r-b")]
    assert store.save_recipes(batch) == 2
    assert store.save_recipes(batch + [make_recipe("C", id="r-c")]) == 1
    assert titles(store.search_recipes()) == ["A", "B", "C"]
