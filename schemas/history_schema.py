"""Schemas for diet history requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional

from domain.models import DietHistory
from domain.parsing import parse_date, parse_uuid


class DietEntryCreateRequest(BaseModel):
    """Payload for logging an attempt at a dish.

    Identifiers and the date arrive as strings and are parsed explicitly so a
    malformed value yields a 400 naming the field.
    """

    user_id: str = Field(..., examples=["user-123"])
    diet_item_id: str = Field(..., examples=["6f1c2a9e-7d1b-4f3e-9a55-2a4c7e8b9d10"], description="UUID of the dish")
    date_attempted: str = Field(..., examples=["2024-05-01"], description="YYYY-MM-DD, not in the future")
    rating: Optional[int] = Field(None, examples=[4], description="Rating from 1 (poor) to 5 (excellent)")
    notes: Optional[str] = Field(None, examples=["Added extra spinach"])
    was_prepared: bool = Field(False, description="Whether the dish was actually cooked")
    meal_type: str = Field(..., examples=["dinner"], description="breakfast, lunch, dinner or snack")

    def to_domain(self) -> DietHistory:
        return DietHistory(
            user_id=self.user_id,
            diet_item_id=parse_uuid(self.diet_item_id, "diet_item_id"),
            date_attempted=parse_date(self.date_attempted, "date_attempted"),
            rating=self.rating,
            notes=self.notes,
            was_prepared=self.was_prepared,
            meal_type=self.meal_type,
        )


class DietEntryUpdateRequest(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    rating: Optional[int] = Field(None, examples=[5])
    notes: Optional[str] = Field(None, examples=["Even better the second time"])
    was_prepared: Optional[bool] = Field(None, examples=[True])


class DietEntryUpdateResponse(BaseModel):
    id: str
    updated: bool


class HistoryCountResponse(BaseModel):
    user_id: str
    count: int
