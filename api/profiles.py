"""Health profile endpoints."""

from fastapi import APIRouter, Depends
from typing import Optional

from core.logger import get_logger
from database.deps import get_store
from database.store import DietStore
from domain.models import HealthProfile
from schemas.profile_schema import ProfileDeleteResponse, ProfileSaveRequest

logger = get_logger("api.profiles")
router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.put("", response_model=HealthProfile)
def save_profile(payload: ProfileSaveRequest, store: DietStore = Depends(get_store)):
    """Create the profile of ``payload.user_id`` or replace its fields.

    Raises:
        ValidationError: If the profile breaks an invariant (age range, tag overlap, ...).
    """
    return store.save_profile(payload.to_domain())


@router.get("/{user_id}", response_model=Optional[HealthProfile])
def get_profile(user_id: str, store: DietStore = Depends(get_store)):
    """Return the stored profile, or ``null`` when the user has none."""
    profile = store.get_profile(user_id)
    if profile is None:
        logger.debug("No profile stored for user %s", user_id)
    return profile


@router.delete("/{user_id}", response_model=ProfileDeleteResponse)
def delete_profile(user_id: str, store: DietStore = Depends(get_store)):
    """Delete the profile together with the user's history and saved recommendations."""
    counts = store.delete_profile(user_id)
    return ProfileDeleteResponse(user_id=user_id, deleted=counts)
