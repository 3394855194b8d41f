"""Recommendation use case.

Glues the store, the recipe catalog and the engine together: a user with a
stored profile gets personalized recommendations, anyone else the default
selection.
"""

from typing import Callable, List, Optional

from core.config import AppConfig
from core.logger import get_logger
from core.performance import PerformanceTimer
from database.store import DietStore, Identifier
from domain.models import DietRecommendation, Recipe
from services.recommendation_engine import RecommendationEngine

logger = get_logger("services.recommendation_service")


class RecommendationService:
    """Produce recommendations for a user id.

    Attributes:
        store: Store holding profiles and saved recommendations.
        catalog_loader: Callable returning the current recipe catalog.
        config: Application configuration (timing threshold).
    """

    def __init__(self, store: DietStore, catalog_loader: Callable[[], List[Recipe]], config: AppConfig):
        self.store = store
        self.catalog_loader = catalog_loader
        self.config = config

    def recommend(self, user_id: str, persist: bool = False) -> List[DietRecommendation]:
        """Recommendations for ``user_id``.

        Args:
            user_id: User to recommend for; a profile is optional.
            persist: Also store every generated recommendation, so it can be
                fetched later by id.

        Raises:
            StorageError: If the profile lookup fails or the catalog is
                missing or malformed.
        """
        with PerformanceTimer(f"get_recommendations for user {user_id}",
                              threshold_ms=self.config.slow_operation_ms, log=logger):
            profile = self.store.get_profile(user_id)
            engine = RecommendationEngine(self.catalog_loader())

            if profile is not None:
                logger.info("Found health profile for user %s, generating personalized recommendations", user_id)
                recommendations = engine.get_recommendations(profile)
            else:
                logger.info("No health profile for user %s, generating default recommendations", user_id)
                recommendations = engine.get_default_recommendations(user_id)

            if persist:
                self.store.save_recommendations(recommendations)

        logger.info("Generated %s recommendations for user %s", len(recommendations), user_id)
        return recommendations

    def get_recommendation_by_id(self, rec_id: Identifier) -> Optional[DietRecommendation]:
        return self.store.get_recommendation_by_id(rec_id)
