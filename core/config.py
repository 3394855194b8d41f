"""Application configuration.

`AppConfig` is built once at startup (usually via `AppConfig.from_env`) and
handed explicitly to the store, the catalog loader and the recommendation
service. Nothing in the application reads configuration lazily from a
module-level global.
"""

import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from core.exceptions import ConfigurationError

APP_NAME = "SmartDiet"
APP_VERSION = "0.1.0"

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "sample_recipes.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def platform_data_dir(app_name: str = APP_NAME) -> Optional[Path]:
    """Return the per-user data directory for the current platform.

    macOS: ``~/Library/Application Support/<app>``; Windows: ``%APPDATA%/<app>``;
    everything else: ``~/.local/share/<app>``. Returns None when the relevant
    environment variable is missing.
    """
    if sys.platform == "darwin":
        home = os.getenv("HOME")
        return Path(home) / "Library" / "Application Support" / app_name if home else None
    if sys.platform.startswith("win"):
        appdata = os.getenv("APPDATA")
        return Path(appdata) / app_name if appdata else None
    home = os.getenv("HOME")
    return Path(home) / ".local" / "share" / app_name if home else None


def _parse_bool(raw: str, key: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Expected a boolean for {key}, got '{raw}'", config_key=key)


class AppConfig(BaseModel):
    """Explicit configuration value shared by the store and the engines."""

    version: str = APP_VERSION
    storage_path: Path = Field(default_factory=lambda: platform_data_dir() or Path("."))
    database_url: Optional[str] = None
    catalog_path: Path = DEFAULT_CATALOG_PATH
    privacy_mode: bool = False
    theme: str = "system"
    log_level: str = "INFO"
    slow_operation_ms: int = 200

    @field_validator("theme")
    @classmethod
    def _check_theme(cls, value: str) -> str:
        if value not in ("light", "dark", "system"):
            raise ValueError("theme must be one of 'light', 'dark', 'system'")
        return value

    @field_validator("slow_operation_ms")
    @classmethod
    def _check_threshold(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("slow_operation_ms must be positive")
        return value

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build the configuration from ``SMART_DIET_*`` environment variables.

        Raises:
            ConfigurationError: If a variable holds a value that cannot be used.
        """
        values = {}
        if os.getenv("SMART_DIET_STORAGE_PATH"):
            values["storage_path"] = Path(os.environ["SMART_DIET_STORAGE_PATH"])
        if os.getenv("SMART_DIET_DATABASE_URL"):
            values["database_url"] = os.environ["SMART_DIET_DATABASE_URL"]
        if os.getenv("SMART_DIET_CATALOG_PATH"):
            values["catalog_path"] = Path(os.environ["SMART_DIET_CATALOG_PATH"])
        if "SMART_DIET_PRIVACY_MODE" in os.environ:
            values["privacy_mode"] = _parse_bool(os.environ["SMART_DIET_PRIVACY_MODE"], "SMART_DIET_PRIVACY_MODE")
        if os.getenv("SMART_DIET_THEME"):
            values["theme"] = os.environ["SMART_DIET_THEME"]
        if os.getenv("SMART_DIET_LOG_LEVEL"):
            values["log_level"] = os.environ["SMART_DIET_LOG_LEVEL"]
        if os.getenv("SMART_DIET_SLOW_MS"):
            raw = os.environ["SMART_DIET_SLOW_MS"]
            try:
                values["slow_operation_ms"] = int(raw)
            except ValueError as exc:
                raise ConfigurationError(f"Expected an integer for SMART_DIET_SLOW_MS, got '{raw}'",
                                         config_key="SMART_DIET_SLOW_MS") from exc
        try:
            return cls(**values)
        except ValueError as exc:
            # pydantic's ValidationError subclasses ValueError
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc

    @property
    def db_path(self) -> Path:
        return self.storage_path / "data.db"

    def get_database_url(self) -> str:
        """Return the SQLAlchemy URL of the store, defaulting to the storage dir."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.db_path}"

    def ensure_storage_dir(self) -> Path:
        """Create the storage directory if needed and return it."""
        try:
            self.storage_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot create storage directory {self.storage_path}: {exc}",
                config_key="storage_path",
            ) from exc
        return self.storage_path
