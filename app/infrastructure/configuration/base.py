"""Base settings classes and shared validators."""

from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Every section reads the same .env file with exact-case aliases
SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=True,
    extra="ignore",
    populate_by_name=True,
)


def blank_to_none(value: Any) -> Optional[str]:
    """Trim a string setting; missing or blank values become None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class FeatureSettings(BaseSettings):
    """Base class for settings of the localization behaviour (cultures, tenants, keys)."""

    model_config = SETTINGS_CONFIG


class InfrastructureSettings(BaseSettings):
    """Base class for settings of the database and HTTP layers."""

    model_config = SETTINGS_CONFIG
