"""Rule-based relevance scoring.

Pure functions scoring how well a recipe suits a health profile. A recipe
containing a restricted or allergenic ingredient scores 0 no matter what
else it offers; otherwise goal, nutrition, preference and profile
contributions are summed and the total clamped to [0, 1].
"""

from typing import Iterable

from domain.models import HealthProfile, NutritionalInfo, Recipe

BALANCED_MIN_CALORIES = 300.0
BALANCED_MAX_CALORIES = 600.0
BALANCED_MIN_PROTEIN = 15.0


def contains_any(recipe: Recipe, terms: Iterable[str]) -> bool:
    """True if any term is a case-insensitive substring of an ingredient name."""
    names = [ingredient.name.lower() for ingredient in recipe.ingredients]
    for term in terms:
        needle = term.lower()
        if any(needle in name for name in names):
            return True
    return False


def passes_restrictions(recipe: Recipe, profile: HealthProfile) -> bool:
    """False when the recipe hits one of the profile's restrictions or allergies."""
    return not (contains_any(recipe, profile.dietary_restrictions)
                or contains_any(recipe, profile.allergies))


def is_balanced_meal(nutrition: NutritionalInfo) -> bool:
    """300-600 kcal (inclusive) with at least 15 g protein."""
    return (BALANCED_MIN_CALORIES <= nutrition.calories <= BALANCED_MAX_CALORIES
            and nutrition.protein >= BALANCED_MIN_PROTEIN)


def goal_score(recipe: Recipe, profile: HealthProfile) -> float:
    nutrition = recipe.nutritional_info_per_serving
    score = 0.0
    for goal in profile.health_goals:
        if goal == "weight_loss":
            if nutrition.calories < 400:
                score += 0.15
            if nutrition.fiber > 5:
                score += 0.10
        elif goal == "muscle_gain":
            if nutrition.protein > 25:
                score += 0.20
        elif goal == "maintain":
            if is_balanced_meal(nutrition):
                score += 0.10
    return score


def nutrition_score(recipe: Recipe) -> float:
    # applies on top of the ``maintain`` goal bonus, so balanced meals count twice there
    return 0.10 if is_balanced_meal(recipe.nutritional_info_per_serving) else 0.0


def preference_score(recipe: Recipe, profile: HealthProfile) -> float:
    score = 0.0
    for preference in profile.dietary_preferences:
        if preference in recipe.tags:
            score += 0.15
    for emphasized in ("vegetarian", "low_carb"):
        if emphasized in profile.dietary_preferences and emphasized in recipe.tags:
            score += 0.10
    return score


def profile_characteristic_score(recipe: Recipe, profile: HealthProfile) -> float:
    """Small nudges from age and activity level; the calorie windows are exclusive."""
    calories = recipe.nutritional_info_per_serving.calories
    score = 0.0

    if profile.age < 30:
        if 300 < calories < 600:
            score += 0.05
    elif profile.age > 50:
        if recipe.difficulty_level in ("easy", "medium"):
            score += 0.05

    if profile.activity_level == "sedentary":
        if 250 < calories < 500:
            score += 0.05
    elif profile.activity_level == "very_active":
        if calories > 400:
            score += 0.05
        if recipe.preparation_time < 45:
            score += 0.05
    return score


def clamp(score: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(high, max(low, score))


def score_recipe(recipe: Recipe, profile: HealthProfile) -> float:
    """Relevance of ``recipe`` for ``profile`` in [0, 1]."""
    if not passes_restrictions(recipe, profile):
        return 0.0
    score = (
        goal_score(recipe, profile)
        + nutrition_score(recipe)
        + preference_score(recipe, profile)
        + profile_characteristic_score(recipe, profile)
    )
    return clamp(score)
