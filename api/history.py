"""Diet history endpoints."""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from core.logger import get_logger
from database.deps import get_store
from database.store import DietStore
from domain.models import DietHistory
from domain.parsing import parse_optional_date, parse_uuid
from schemas.history_schema import (
    DietEntryCreateRequest,
    DietEntryUpdateRequest,
    DietEntryUpdateResponse,
    HistoryCountResponse,
)

logger = get_logger("api.history")
router = APIRouter(prefix="/api/history", tags=["history"])


@router.post("", response_model=DietHistory, status_code=201)
def log_diet_entry(payload: DietEntryCreateRequest, store: DietStore = Depends(get_store)):
    """Record an attempt at a dish.

    The user does not need a stored profile.

    Raises:
        ParseError: If ``diet_item_id`` or ``date_attempted`` is malformed.
        ValidationError: If the rating, date or meal type is invalid.
    """
    return store.log_diet_entry(payload.to_domain())


@router.get("", response_model=List[DietHistory])
def get_diet_history(
    user_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    meal_type: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    store: DietStore = Depends(get_store),
):
    """List a user's entries, newest first, filtered and paginated."""
    return store.get_diet_history(
        user_id,
        start_date=parse_optional_date(start_date, "start_date"),
        end_date=parse_optional_date(end_date, "end_date"),
        limit=limit,
        offset=offset,
        meal_type=meal_type,
    )


@router.get("/count", response_model=HistoryCountResponse)
def get_diet_history_count(
    user_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    meal_type: Optional[str] = None,
    store: DietStore = Depends(get_store),
):
    count = store.get_diet_history_count(
        user_id,
        start_date=parse_optional_date(start_date, "start_date"),
        end_date=parse_optional_date(end_date, "end_date"),
        meal_type=meal_type,
    )
    return HistoryCountResponse(user_id=user_id, count=count)


@router.patch("/{entry_id}", response_model=DietEntryUpdateResponse)
def update_diet_entry(entry_id: str, payload: DietEntryUpdateRequest, store: DietStore = Depends(get_store)):
    """Update the supplied fields of one entry.

    ``updated`` is false when the body carried no field to change.
    """
    parsed = parse_uuid(entry_id, "id")
    logger.info("Updating diet entry %s: %s", parsed, payload.model_dump(exclude_none=True))
    updated = store.update_diet_entry(parsed, payload.rating, payload.notes, payload.was_prepared)
    return DietEntryUpdateResponse(id=str(parsed), updated=updated)


@router.delete("/{entry_id}", status_code=204)
def delete_diet_entry(entry_id: str, store: DietStore = Depends(get_store)):
    store.delete_diet_entry(parse_uuid(entry_id, "id"))
