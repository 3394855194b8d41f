"""Shared fixtures: a throwaway SQLite store per test and entity factories."""
import uuid
from datetime import date

import pytest

from core.config import AppConfig
from database.store import init_store
from domain.models import (
    DietHistory,
    DietRecommendation,
    HealthProfile,
    NutritionalInfo,
    Recipe,
    RecipeIngredient,
)


@pytest.fixture
def config(tmp_path):
    return AppConfig(storage_path=tmp_path / "smart_diet")


@pytest.fixture
def store(config):
    s = init_store(config)
    yield s
    s.dispose()


@pytest.fixture
def make_profile():
    def _make(user_id="user-1", **overrides):
        fields = dict(
            user_id=user_id,
            age=35,
            gender="female",
            weight=62.0,
            height=168.0,
            activity_level="moderate",
            health_goals=[],
            dietary_preferences=[],
            dietary_restrictions=[],
            allergies=[],
        )
        fields.update(overrides)
        return HealthProfile(**fields)
    return _make


@pytest.fixture
def make_recipe():
    def _make(title="Test Dish", ingredients=("rice",), calories=450.0, protein=20.0,
              carbs=50.0, fat=10.0, fiber=3.0, **overrides):
        fields = dict(
            title=title,
            description=f"{title} description",
            ingredients=[RecipeIngredient(name=name, amount=100, unit="g") for name in ingredients],
            nutritional_info_per_serving=NutritionalInfo(
                calories=calories, protein=protein, carbs=carbs, fat=fat, fiber=fiber
            ),
            preparation_time=30,
            difficulty_level="medium",
            meal_type="lunch",
            recipe_instructions="Cook it.",
            tags=[],
        )
        fields.update(overrides)
        return Recipe(**fields)
    return _make


@pytest.fixture
def make_entry():
    def _make(user_id="user-1", date_attempted=date(2024, 1, 1), meal_type="lunch", **overrides):
        fields = dict(
            user_id=user_id,
            diet_item_id=uuid.uuid4(),
            date_attempted=date_attempted,
            meal_type=meal_type,
        )
        fields.update(overrides)
        return DietHistory(**fields)
    return _make


@pytest.fixture
def make_recommendation(make_recipe):
    def _make(user_id="user-1", score=0.5, **recipe_overrides):
        return DietRecommendation.from_recipe(make_recipe(**recipe_overrides), user_id, score, is_personalized=True)
    return _make
