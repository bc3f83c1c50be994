"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    LocalizationStoreDep,
    LocalizationServiceDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_localization_store,
    get_localization_service,
)

__all__ = [
    "SettingsDep",
    "LocalizationStoreDep",
    "LocalizationServiceDep",
    "get_settings",
    "get_localization_store",
    "get_localization_service",
]
