"""Recommendation engine service.

Turns an in-memory recipe catalog into scored recommendations. With a
health profile every recipe is scored by `services.rules`; without one a
diverse default selection is built from difficulty and nutrition alone.
"""

import math
from typing import Dict, Iterable, List, Tuple

from core.logger import get_logger
from domain.models import DietRecommendation, HealthProfile, Recipe, MEAL_TYPES
from services import rules

logger = get_logger("services.recommendation_engine")

MIN_PERSONALIZED_SCORE = 0.1
MAX_PER_MEAL_TYPE = 3
MAX_DEFAULT_RECOMMENDATIONS = 12

DEFAULT_BASE_SCORES = {"easy": 0.8, "medium": 0.6, "hard": 0.4}
MEAL_ORDER = {meal: index for index, meal in enumerate(MEAL_TYPES)}
DIFFICULTY_ORDER = {"easy": 0, "medium": 1, "hard": 2}
DIFFICULTY_WORDS = {"easy": "an easy", "medium": "a medium-difficulty", "hard": "a more demanding"}


def ranking_key(score: float, recipe: Recipe) -> Tuple:
    """Total order for scored recipes.

    NaN sorts last, then higher scores first, then title and id ascending.
    """
    if math.isnan(score):
        return (1, 0.0, recipe.title, recipe.id)
    return (0, -score, recipe.title, recipe.id)


def default_score(recipe: Recipe) -> float:
    nutrition = recipe.nutritional_info_per_serving
    score = DEFAULT_BASE_SCORES.get(recipe.difficulty_level, 0.5)
    if nutrition.protein > 10 and nutrition.fiber > 2:
        score += 0.1
    return min(score, 1.0)


def default_description(recipe: Recipe) -> str:
    difficulty = DIFFICULTY_WORDS.get(recipe.difficulty_level, "a moderate")
    meal = recipe.meal_type if recipe.meal_type in MEAL_ORDER else "dish"
    return f"Recommended as {difficulty} {meal} with balanced nutrition, suited to everyday cooking."


class RecommendationEngine:
    """Class-based recommendation engine over a fixed recipe catalog."""

    def __init__(self, recipes: Iterable[Recipe] = ()):
        """Initialize the engine.

        Parameters
        ----------
        recipes: Iterable[Recipe]
            Candidate recipes; more can be added with `add_recipe`.
        """
        self.recipes: List[Recipe] = list(recipes)

    def add_recipe(self, recipe: Recipe) -> None:
        self.recipes.append(recipe)

    def get_recommendations(self, profile: HealthProfile) -> List[DietRecommendation]:
        """Personalized recommendations for ``profile``, best first.

        Recipes hitting a restriction or allergy are dropped before scoring,
        and only scores above 0.1 are kept.

        Parameters
        ----------
        profile: HealthProfile
            Health profile to score against.

        Returns
        -------
        List[DietRecommendation]
            Personalized recommendations ordered by `ranking_key`.
        """
        scored: List[Tuple[float, Recipe]] = []
        for recipe in self.recipes:
            if not rules.passes_restrictions(recipe, profile):
                continue
            score = rules.score_recipe(recipe, profile)
            if score > MIN_PERSONALIZED_SCORE:
                scored.append((score, recipe))

        scored.sort(key=lambda pair: ranking_key(*pair))
        logger.debug("Scored %s recipes for user %s, kept %s",
                     len(self.recipes), profile.user_id, len(scored))
        return [
            DietRecommendation.from_recipe(recipe, profile.user_id, score, is_personalized=True)
            for score, recipe in scored
        ]

    def get_default_recommendations(self, user_id: str) -> List[DietRecommendation]:
        """A diverse selection for users without a profile.

        The catalog is walked once in order, admitting at most three recipes
        per meal type and twelve overall. The result is grouped by meal type
        and then by difficulty, easiest first; it is not ranked by score.
        """
        per_meal: Dict[str, int] = {meal: 0 for meal in MEAL_TYPES}
        selected: List[Recipe] = []
        for recipe in self.recipes:
            if recipe.meal_type in per_meal and per_meal[recipe.meal_type] < MAX_PER_MEAL_TYPE:
                per_meal[recipe.meal_type] += 1
                selected.append(recipe)
            if len(selected) >= MAX_DEFAULT_RECOMMENDATIONS:
                break

        # stable sort keeps catalog order within a group
        selected.sort(key=lambda r: (MEAL_ORDER.get(r.meal_type, len(MEAL_ORDER)),
                                     DIFFICULTY_ORDER.get(r.difficulty_level, len(DIFFICULTY_ORDER))))
        logger.debug("Selected %s default recipes for user %s", len(selected), user_id)
        return [
            DietRecommendation.from_recipe(
                recipe,
                user_id,
                default_score(recipe),
                is_personalized=False,
                description=default_description(recipe),
            )
            for recipe in selected
        ]
