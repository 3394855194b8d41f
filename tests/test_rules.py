"""Tests for the rule-based relevance scoring."""
import pytest

from services import rules


def test_weight_loss_rewards_light_high_fiber_meals(make_profile, make_recipe):
    profile = make_profile(health_goals=["weight_loss"])
    light = make_recipe(calories=350, fiber=6)
    heavy = make_recipe(calories=800, fiber=1)

    assert rules.goal_score(light, profile) == pytest.approx(0.25)
    assert rules.score_recipe(light, profile) >= 0.25
    assert rules.goal_score(heavy, profile) == 0.0


def test_muscle_gain_needs_more_than_25g_protein(make_profile, make_recipe):
    profile = make_profile(health_goals=["muscle_gain"])
    assert rules.goal_score(make_recipe(protein=26), profile) == pytest.approx(0.20)
    assert rules.goal_score(make_recipe(protein=25), profile) == 0.0


@pytest.mark.parametrize("calories,protein,expected", [
    (300, 15, True),
    (600, 15, True),
    (299, 30, False),
    (601, 30, False),
    (450, 14.9, False),
])
def test_balanced_meal_window_is_inclusive(make_recipe, calories, protein, expected):
    recipe = make_recipe(calories=calories, protein=protein)
    assert rules.is_balanced_meal(recipe.nutritional_info_per_serving) is expected


def test_maintain_counts_balanced_meal_twice(make_profile, make_recipe):
    profile = make_profile(age=40, health_goals=["maintain"])
    balanced = make_recipe(calories=450, protein=20)
    assert rules.goal_score(balanced, profile) == pytest.approx(0.10)
    assert rules.nutrition_score(balanced) == pytest.approx(0.10)
    assert rules.score_recipe(balanced, profile) == pytest.approx(0.20)


def test_preferences_and_emphasized_tags(make_profile, make_recipe):
    profile = make_profile(dietary_preferences=["vegetarian", "low_carb", "spicy"])
    recipe = make_recipe(tags=["vegetarian", "low_carb"])
    # 0.15 per matching tag plus 0.10 each for vegetarian and low_carb
    assert rules.preference_score(recipe, profile) == pytest.approx(0.50)
    assert rules.preference_score(make_recipe(tags=["Vegetarian"]), profile) == 0.0


def test_profile_characteristics(make_profile, make_recipe):
    young = make_profile(age=25)
    assert rules.profile_characteristic_score(make_recipe(calories=450), young) == pytest.approx(0.05)
    assert rules.profile_characteristic_score(make_recipe(calories=300), young) == 0.0

    senior = make_profile(age=60)
    assert rules.profile_characteristic_score(make_recipe(difficulty_level="easy"), senior) == pytest.approx(0.05)
    assert rules.profile_characteristic_score(make_recipe(difficulty_level="hard"), senior) == 0.0

    sedentary = make_profile(age=40, activity_level="sedentary")
    assert rules.profile_characteristic_score(make_recipe(calories=300), sedentary) == pytest.approx(0.05)
    assert rules.profile_characteristic_score(make_recipe(calories=500), sedentary) == 0.0

    athlete = make_profile(age=40, activity_level="very_active")
    assert rules.profile_characteristic_score(make_recipe(calories=450, preparation_time=30), athlete) == pytest.approx(0.10)


def test_restriction_vetoes_regardless_of_bonuses(make_profile, make_recipe):
    profile = make_profile(
        health_goals=["weight_loss", "maintain"],
        dietary_preferences=["vegetarian"],
        dietary_restrictions=["Peanut"],
    )
    recipe = make_recipe(ingredients=("rice", "roasted peanuts"), calories=350, fiber=6, tags=["vegetarian"])
    assert rules.passes_restrictions(recipe, profile) is False
    assert rules.score_recipe(recipe, profile) == 0.0


def test_allergy_vetoes(make_profile, make_recipe):
    profile = make_profile(allergies=["shrimp"])
    assert rules.score_recipe(make_recipe(ingredients=("Shrimp paste",)), profile) == 0.0


def test_score_is_clamped_to_one(make_profile, make_recipe):
    profile = make_profile(
        age=25,
        activity_level="very_active",
        health_goals=["weight_loss", "muscle_gain", "maintain"],
        dietary_preferences=["vegetarian", "low_carb", "high_protein", "quick"],
    )
    recipe = make_recipe(calories=390, protein=30, fiber=8, preparation_time=10,
                         tags=["vegetarian", "low_carb", "high_protein", "quick"])
    assert rules.score_recipe(recipe, profile) == 1.0
