"""Infrastructure modules for the localization provider.

Centralized infrastructure components:
- configuration: Settings management (settings, LocalizationSettings, DatabaseSettings)
- logging: Structured logging (get_module_logger, configure_logging)
- localization: Database-backed string localization
- services: Dependency injection services (SettingsDep, LocalizationServiceDep, get_settings)
"""

# Configuration
from infrastructure.configuration import settings

# Observability
from infrastructure.logging import configure_logging, get_module_logger

# Dependency Injection Services
from infrastructure.services import (
    SettingsDep,
    LocalizationServiceDep,
    get_settings,
    get_localization_service,
)

__all__ = [
    # Configuration
    "settings",
    # Observability
    "configure_logging",
    "get_module_logger",
    # Dependency Injection Services
    "SettingsDep",
    "LocalizationServiceDep",
    "get_settings",
    "get_localization_service",
]
