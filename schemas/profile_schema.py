"""Schemas for health profile requests and responses."""

from pydantic import BaseModel, Field
from typing import Dict, List

from domain.models import HealthProfile


class ProfileSaveRequest(BaseModel):
    """Request payload for creating or replacing a user's health profile.

    Ranges are not constrained here; `HealthProfile.validate_fields` owns
    them so every caller gets the same 400 response.
    """

    user_id: str = Field(..., examples=["user-123"], description="Caller-chosen user identifier")
    age: int = Field(..., examples=[30], description="Age in years (18-120)")
    gender: str = Field(..., examples=["female"], description="male, female, other or prefer_not_to_say")
    weight: float = Field(..., examples=[65.0], description="Weight in kilograms")
    height: float = Field(..., examples=[170.0], description="Height in centimeters")
    activity_level: str = Field(..., examples=["moderate"], description="sedentary, light, moderate, active or very_active")
    health_goals: List[str] = Field(default=[], examples=[["weight_loss"]], description="weight_loss, muscle_gain, maintain")
    dietary_preferences: List[str] = Field(default=[], examples=[["vegetarian"]], description="Tags the user likes")
    dietary_restrictions: List[str] = Field(default=[], examples=[["pork"]], description="Ingredients to avoid")
    allergies: List[str] = Field(default=[], examples=[["peanut"]], description="Allergenic ingredients")

    def to_domain(self) -> HealthProfile:
        return HealthProfile(**self.model_dump())


class ProfileDeleteResponse(BaseModel):
    """Rows removed per table by a profile delete."""

    user_id: str
    deleted: Dict[str, int]
