"""Pydantic schema package for request and response models."""

from .profile_schema import ProfileSaveRequest, ProfileDeleteResponse
from .history_schema import (
    DietEntryCreateRequest,
    DietEntryUpdateRequest,
    DietEntryUpdateResponse,
    HistoryCountResponse,
)
from .config_schema import ConfigResponse

__all__ = [
    "ProfileSaveRequest",
    "ProfileDeleteResponse",
    "DietEntryCreateRequest",
    "DietEntryUpdateRequest",
    "DietEntryUpdateResponse",
    "HistoryCountResponse",
    "ConfigResponse",
]
