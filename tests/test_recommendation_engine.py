"""Tests for personalized and default recommendation generation."""
import math

import pytest

from services.recommendation_engine import RecommendationEngine, default_score, ranking_key


def test_vetoed_recipe_never_recommended(make_profile, make_recipe):
    profile = make_profile(health_goals=["maintain"], allergies=["peanut"])
    engine = RecommendationEngine([
        make_recipe("Peanut Noodles", ingredients=("noodles", "peanut butter")),
        make_recipe("Plain Rice", ingredients=("rice",)),
    ])
    titles = [r.title for r in engine.get_recommendations(profile)]
    assert "Peanut Noodles" not in titles
    assert titles == ["Plain Rice"]


def test_personalized_results_are_sorted_and_filtered(make_profile, make_recipe):
    profile = make_profile(health_goals=["muscle_gain"])
    engine = RecommendationEngine()
    engine.add_recipe(make_recipe("Steak", protein=40, calories=700))          # 0.20
    engine.add_recipe(make_recipe("Chicken Bowl", protein=35, calories=500))   # 0.20 + 0.10
    engine.add_recipe(make_recipe("Cucumber", protein=1, calories=20))         # 0.0, dropped

    recs = engine.get_recommendations(profile)

    assert [r.title for r in recs] == ["Chicken Bowl", "Steak"]
    assert [r.relevance_score for r in recs] == pytest.approx([0.30, 0.20])
    assert all(r.is_personalized and r.user_id == "user-1" for r in recs)


def test_score_exactly_at_threshold_is_dropped(make_profile, make_recipe):
    # young + sedentary windows give 0.05 + 0.05; protein too low to be balanced
    recipe = make_recipe(calories=400, protein=10, tags=["quick"])
    engine = RecommendationEngine([recipe])
    assert engine.get_recommendations(make_profile(age=25, activity_level="sedentary")) == []

    liked = make_profile(age=25, activity_level="sedentary", dietary_preferences=["quick"])
    assert [r.relevance_score for r in engine.get_recommendations(liked)] == pytest.approx([0.25])


def test_equal_scores_break_ties_by_title_then_id(make_profile, make_recipe):
    profile = make_profile(health_goals=["muscle_gain"])
    engine = RecommendationEngine([
        make_recipe("Beta", id="b-2", protein=30, calories=800),
        make_recipe("Alpha", id="a-1", protein=30, calories=800),
        make_recipe("Beta", id="b-1", protein=30, calories=800),
    ])
    first = [(r.title, r.relevance_score) for r in engine.get_recommendations(profile)]
    assert [t for t, _ in first] == ["Alpha", "Beta", "Beta"]
    # deterministic regardless of catalog order
    engine.recipes.reverse()
    assert [(r.title, r.relevance_score) for r in engine.get_recommendations(profile)] == first


def test_ranking_key_puts_nan_last(make_recipe):
    a, b, c = make_recipe("A", id="1"), make_recipe("B", id="2"), make_recipe("C", id="3")
    ordered = sorted([(math.nan, a), (0.3, b), (0.9, c)], key=lambda pair: ranking_key(*pair))
    assert [recipe.title for _, recipe in ordered] == ["C", "B", "A"]


def test_default_mode_caps_each_meal_type(make_recipe):
    catalog = [make_recipe(f"Breakfast {i}", meal_type="breakfast") for i in range(5)]
    catalog += [make_recipe(f"Lunch {i}", meal_type="lunch") for i in range(5)]
    recs = RecommendationEngine(catalog).get_default_recommendations("guest")

    assert len(recs) == 6
    assert [r.meal_type for r in recs].count("breakfast") == 3
    assert [r.meal_type for r in recs].count("lunch") == 3
    assert not any(r.is_personalized for r in recs)
    assert all(r.user_id == "guest" for r in recs)


def test_default_mode_stops_at_twelve(make_recipe):
    catalog = [make_recipe(f"{meal} {i}", meal_type=meal)
               for i in range(4) for meal in ("breakfast", "lunch", "dinner", "snack")]
    recs = RecommendationEngine(catalog).get_default_recommendations("guest")
    assert len(recs) == 12


def test_default_mode_orders_by_meal_then_difficulty(make_recipe):
    catalog = [
        make_recipe("Hard Dinner", meal_type="dinner", difficulty_level="hard"),
        make_recipe("Easy Snack", meal_type="snack", difficulty_level="easy"),
        make_recipe("Medium Breakfast", meal_type="breakfast", difficulty_level="medium"),
        make_recipe("Easy Dinner", meal_type="dinner", difficulty_level="easy"),
        make_recipe("Easy Breakfast", meal_type="breakfast", difficulty_level="easy"),
    ]
    recs = RecommendationEngine(catalog).get_default_recommendations("guest")
    assert [r.title for r in recs] == [
        "Easy Breakfast", "Medium Breakfast", "Easy Dinner", "Hard Dinner", "Easy Snack",
    ]
    assert "easy" in recs[0].description and "breakfast" in recs[0].description


@pytest.mark.parametrize("difficulty,protein,fiber,expected", [
    ("easy", 5, 1, 0.8),
    ("easy", 12, 3, 0.9),
    ("medium", 12, 3, 0.7),
    ("hard", 5, 5, 0.4),
])
def test_default_score(make_recipe, difficulty, protein, fiber, expected):
    recipe = make_recipe(difficulty_level=difficulty, protein=protein, fiber=fiber)
    assert default_score(recipe) == pytest.approx(expected)
