"""Domain package: entities, invariants and input parsing."""

from .models import (
    HealthProfile,
    NutritionalInfo,
    Ingredient,
    RecipeIngredient,
    Recipe,
    DietHistory,
    DietRecommendation,
    validate_rating,
    MEAL_TYPES,
    DIFFICULTY_LEVELS,
    ACTIVITY_LEVELS,
)

__all__ = [
    "HealthProfile",
    "NutritionalInfo",
    "Ingredient",
    "RecipeIngredient",
    "Recipe",
    "DietHistory",
    "DietRecommendation",
    "validate_rating",
    "MEAL_TYPES",
    "DIFFICULTY_LEVELS",
    "ACTIVITY_LEVELS",
]
