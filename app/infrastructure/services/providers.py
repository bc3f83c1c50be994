"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.localization import LocalizationService, LocalizationStore, create_store


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.localization.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_localization_store() -> LocalizationStore:
    """
    Get application-scoped localization store singleton.

    The store owns the SQLAlchemy engine and its connection pool, so one
    instance is shared by the whole process.

    Returns:
        LocalizationStore: Store built from the database settings.

    Raises:
        LocalizationConfigurationError: If the database settings are invalid.
    """
    return create_store(get_settings().database)


@lru_cache
def get_localization_service() -> LocalizationService:
    """
    Get application-scoped localization service singleton.

    Returns:
        LocalizationService: Service wired to the shared store.

    Usage:
        @router.get("/label")
        def get_label(localization: LocalizationServiceDep):
            return localization.resolve("Order.Status").value
    """
    return LocalizationService(settings=get_settings(), store=get_localization_store())
