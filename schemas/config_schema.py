"""Schema for the public view of the application configuration."""

from pydantic import BaseModel

from core.config import AppConfig


class ConfigResponse(BaseModel):
    version: str
    storage_path: str
    privacy_mode: bool
    theme: str

    @classmethod
    def from_config(cls, config: AppConfig) -> "ConfigResponse":
        return cls(
            version=config.version,
            storage_path=str(config.storage_path),
            privacy_mode=config.privacy_mode,
            theme=config.theme,
        )
