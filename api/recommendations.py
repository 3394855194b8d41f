"""Recommendation endpoints.

Personalized recommendations are produced when the user has a stored
health profile; otherwise a default selection across meal types is
returned.
"""

from fastapi import APIRouter, Depends
from typing import List

from core.exceptions import NotFoundError
from core.logger import get_logger
from database.deps import get_recommendation_service
from domain.models import DietRecommendation
from domain.parsing import parse_uuid
from services.recommendation_service import RecommendationService

logger = get_logger("api.recommendations")
router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.get("/user/{user_id}", response_model=List[DietRecommendation])
def get_recommendations(
    user_id: str,
    persist: bool = False,
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Generate recommendations for ``user_id``.

    With ``persist=true`` the results are stored and can be fetched again by id.

    Raises:
        StorageError: If the recipe catalog is missing or malformed.
    """
    logger.info("Recommendations requested: user=%s persist=%s", user_id, persist)
    return service.recommend(user_id, persist=persist)


@router.get("/{rec_id}", response_model=DietRecommendation)
def get_recommendation(rec_id: str, service: RecommendationService = Depends(get_recommendation_service)):
    """Return a stored recommendation.

    Raises:
        ParseError: If ``rec_id`` is not a UUID.
        NotFoundError: If nothing is stored under ``rec_id``.
    """
    rec = service.get_recommendation_by_id(parse_uuid(rec_id, "id"))
    if rec is None:
        raise NotFoundError("Recommendation", rec_id)
    return rec
