"""Top-level settings aggregate for the localization provider."""

from pydantic import model_validator
from pydantic_settings import BaseSettings

from infrastructure.configuration.base import SETTINGS_CONFIG
from infrastructure.configuration.features import LocalizationSettings
from infrastructure.configuration.infrastructure import (
    DatabaseSettings,
    ServerSettings,
)

SECTIONS = {
    "localization": LocalizationSettings,
    "database": DatabaseSettings,
    "server": ServerSettings,
}


class Settings(BaseSettings):
    """Aggregate of every settings section.

    - ``localization``: cultures, fallback, tenant and key prefix of lookups
    - ``database``: provider and URL of the translation store
    - ``server``: culture cookie, query parameter and tenant header names

    Environment Variables:
        PREFIX: Environment prefix for non-production deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        settings.localization.supported_cultures  # ["en-US", "fr-CA"]
        settings.database.provider                # "postgresql"
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    localization: LocalizationSettings
    database: DatabaseSettings
    server: ServerSettings

    model_config = SETTINGS_CONFIG

    def __init__(self, **kwargs):
        """Build any section not passed explicitly from the environment."""
        for name, section in SECTIONS.items():
            if name not in kwargs:
                kwargs[name] = section()
        super().__init__(**kwargs)

    @property
    def is_production(self) -> bool:
        """True when PREFIX is empty."""
        return not bool(self.PREFIX)

    @model_validator(mode="after")
    def _default_culture_is_supported(self) -> "Settings":
        # The default culture is always offered
        localization = self.localization
        supported = [c.lower() for c in localization.supported_cultures]
        if localization.default_culture.lower() not in supported:
            localization.supported_cultures = [
                localization.default_culture,
                *localization.supported_cultures,
            ]
        return self


settings = Settings()
