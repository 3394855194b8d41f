"""Domain entities for SmartDiet.

Pydantic models describing health profiles, recipes, diet history entries
and generated recommendations. They carry no behavior beyond validation:
`validate_fields()` checks the business invariants and raises
`core.exceptions.ValidationError`, and is called before anything is handed
to the store.
"""

import math
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from core.exceptions import ValidationError

GENDERS = ("male", "female", "other", "prefer_not_to_say")
ACTIVITY_LEVELS = ("sedentary", "light", "moderate", "active", "very_active")
DIFFICULTY_LEVELS = ("easy", "medium", "hard")
MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HealthProfile(BaseModel):
    """A user's health and dietary attributes; one per ``user_id``."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    user_id: str
    age: int = 0
    gender: str = "prefer_not_to_say"
    weight: float = 0.0  # kg
    height: float = 0.0  # cm
    activity_level: str = "moderate"
    health_goals: List[str] = Field(default_factory=list)  # free-form; only weight_loss, muscle_gain and maintain score
    dietary_preferences: List[str] = Field(default_factory=list)
    dietary_restrictions: List[str] = Field(default_factory=list)  # ingredients to avoid
    allergies: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def validate_fields(self) -> None:
        """Check profile invariants.

        Raises:
            ValidationError: On an out-of-range age, a weight or height that
                is not a positive finite number, unknown gender/activity
                level, or a tag that appears both in preferences and in
                restrictions or allergies.
        """
        if not self.user_id.strip():
            raise ValidationError("User id must not be empty", field="user_id")
        if self.age < 18 or self.age > 120:
            raise ValidationError("Age must be between 18 and 120", field="age")
        if not math.isfinite(self.weight) or self.weight <= 0:
            raise ValidationError("Weight must be positive", field="weight")
        if not math.isfinite(self.height) or self.height <= 0:
            raise ValidationError("Height must be positive", field="height")
        if self.gender not in GENDERS:
            raise ValidationError(f"Invalid gender '{self.gender}'", field="gender")
        if self.activity_level not in ACTIVITY_LEVELS:
            raise ValidationError(f"Invalid activity level '{self.activity_level}'", field="activity_level")

        for restriction in self.dietary_restrictions:
            if restriction in self.dietary_preferences:
                raise ValidationError(
                    f"Dietary restriction '{restriction}' cannot be in preferences",
                    field="dietary_restrictions",
                )
        for allergy in self.allergies:
            if allergy in self.dietary_preferences:
                raise ValidationError(
                    f"Allergy '{allergy}' cannot be in preferences",
                    field="allergies",
                )


class NutritionalInfo(BaseModel):
    """Per-serving nutrition; grams except calories (kcal)."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float


class Ingredient(BaseModel):
    name: str
    amount: float
    unit: str


class RecipeIngredient(Ingredient):
    optional: bool = False


class Recipe(BaseModel):
    """A catalog recipe. Catalog ids are free-form strings."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    description: str = ""
    ingredients: List[RecipeIngredient] = Field(default_factory=list)
    nutritional_info_per_serving: NutritionalInfo
    preparation_time: int  # minutes
    difficulty_level: str
    meal_type: str
    recipe_instructions: str = ""
    cuisine_type: Optional[str] = None
    seasonal: bool = False
    tags: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def validate_fields(self) -> None:
        """Check recipe invariants.

        Raises:
            ValidationError: On non-positive or non-finite calories, a
                non-positive preparation time, negative or non-finite
                macros, or an unknown difficulty/meal type.
        """
        nutrition = self.nutritional_info_per_serving
        if not math.isfinite(nutrition.calories) or nutrition.calories <= 0:
            raise ValidationError("Calories must be positive", field="calories")
        for name in ("protein", "carbs", "fat", "fiber"):
            value = getattr(nutrition, name)
            if not math.isfinite(value) or value < 0:
                raise ValidationError(f"{name.capitalize()} must not be negative", field=name)
        if self.preparation_time <= 0:
            raise ValidationError("Preparation time must be positive", field="preparation_time")
        if self.difficulty_level not in DIFFICULTY_LEVELS:
            raise ValidationError("Invalid difficulty level", field="difficulty_level")
        if self.meal_type not in MEAL_TYPES:
            raise ValidationError("Invalid meal type", field="meal_type")


def validate_rating(rating: Optional[int]) -> None:
    """Ratings are optional; when present they must be 1-5."""
    if rating is not None and (rating < 1 or rating > 5):
        raise ValidationError("Rating must be between 1 and 5", field="rating")


class DietHistory(BaseModel):
    """A logged attempt at a recommended or custom dish.

    ``user_id`` and ``diet_item_id`` are plain values; neither has to exist
    in another table.
    """

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    user_id: str
    diet_item_id: uuid.UUID
    date_attempted: date
    rating: Optional[int] = None
    notes: Optional[str] = None
    was_prepared: bool = False
    meal_type: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def validate_fields(self) -> None:
        """Check history invariants.

        Raises:
            ValidationError: On a rating outside 1-5, a future date or an
                unknown meal type.
        """
        validate_rating(self.rating)
        if self.date_attempted > date.today():
            raise ValidationError("Date must not be in the future", field="date_attempted")
        if self.meal_type not in MEAL_TYPES:
            raise ValidationError("Invalid meal type", field="meal_type")


class DietRecommendation(BaseModel):
    """A scored snapshot of a recipe produced for one user."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    user_id: str
    title: str
    description: str = ""
    ingredients: List[Ingredient] = Field(default_factory=list)
    nutritional_info: NutritionalInfo
    preparation_time: int
    difficulty_level: str
    meal_type: str
    recipe_instructions: str = ""
    created_at: datetime = Field(default_factory=utc_now)
    is_personalized: bool
    relevance_score: float

    def validate_fields(self) -> None:
        if not 0.0 <= self.relevance_score <= 1.0:
            raise ValidationError("Relevance score must be between 0 and 1", field="relevance_score")

    @classmethod
    def from_recipe(cls, recipe: Recipe, user_id: str, relevance_score: float,
                    is_personalized: bool, description: Optional[str] = None) -> "DietRecommendation":
        """Snapshot ``recipe`` for ``user_id``; optional ingredient flags are dropped."""
        return cls(
            user_id=user_id,
            title=recipe.title,
            description=recipe.description if description is None else description,
            ingredients=[Ingredient(name=i.name, amount=i.amount, unit=i.unit) for i in recipe.ingredients],
            nutritional_info=recipe.nutritional_info_per_serving.model_copy(),
            preparation_time=recipe.preparation_time,
            difficulty_level=recipe.difficulty_level,
            meal_type=recipe.meal_type,
            recipe_instructions=recipe.recipe_instructions,
            is_personalized=is_personalized,
            relevance_score=relevance_score,
        )
