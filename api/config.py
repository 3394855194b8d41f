"""Configuration endpoint."""

from fastapi import APIRouter, Depends

from core.config import AppConfig
from database.deps import get_config
from schemas.config_schema import ConfigResponse

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("", response_model=ConfigResponse)
def read_config(config: AppConfig = Depends(get_config)):
    """Return the version, storage location, privacy mode and theme in effect."""
    return ConfigResponse.from_config(config)
