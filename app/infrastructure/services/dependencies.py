"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.localization import LocalizationService, LocalizationStore
from infrastructure.services.providers import (
    get_settings,
    get_localization_store,
    get_localization_service,
)

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Localization store dependency
LocalizationStoreDep = Annotated[LocalizationStore, Depends(get_localization_store)]

# Localization service facade - localizers, seeding, sync and admin operations
# Usage: localization.resolve("Order.Status", culture="fr-CA"), localization.admin.list()
LocalizationServiceDep = Annotated[
    LocalizationService, Depends(get_localization_service)
]

__all__ = [
    "SettingsDep",
    "LocalizationStoreDep",
    "LocalizationServiceDep",
]
