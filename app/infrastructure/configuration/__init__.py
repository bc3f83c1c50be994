"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the
localization provider using Pydantic BaseSettings with domain-based
organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    LocalizationSettings: Culture and tenant settings (for testing)
    DatabaseSettings: Store connection settings (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    culture = settings.localization.default_culture
    provider = settings.database.provider
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.features import LocalizationSettings
from infrastructure.configuration.infrastructure import (
    DatabaseSettings,
    ServerSettings,
)

__all__ = [
    "settings",
    "Settings",
    "LocalizationSettings",
    "DatabaseSettings",
    "ServerSettings",
]
