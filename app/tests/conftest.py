"""Root-level fixtures shared by unit and integration tests.

Every store is built on an in-memory SQLite database so tests never touch
the filesystem or each other's data.
"""

from typing import Optional

import pytest

from infrastructure.configuration import (
    DatabaseSettings,
    LocalizationSettings,
    Settings,
)
from infrastructure.localization import (
    LocalizationService,
    SqlAlchemyLocalizationStore,
    TenantScope,
    create_store,
)


@pytest.fixture
def database_settings():
    """In-memory SQLite database settings."""
    return DatabaseSettings(
        LOCALIZATION_DB_PROVIDER="sqlite",
        LOCALIZATION_DB_URL="sqlite://",
    )


@pytest.fixture
def localization_settings():
    """Localization settings with English and French cultures."""
    return LocalizationSettings(
        LOCALIZATION_DEFAULT_CULTURE="en-US",
        LOCALIZATION_SUPPORTED_CULTURES=["en-US", "fr-FR", "fr-CA"],
        LOCALIZATION_ENABLE_CULTURE_FALLBACK=True,
    )


@pytest.fixture
def test_settings(localization_settings, database_settings):
    """Settings aggregate built from the test sub-settings."""
    return Settings(localization=localization_settings, database=database_settings)


@pytest.fixture
def store(database_settings) -> SqlAlchemyLocalizationStore:
    """Empty localization store with its schema created."""
    store = create_store(database_settings, create_schema=True)
    yield store
    store.engine.dispose()


@pytest.fixture
def localization_service(test_settings, store) -> LocalizationService:
    return LocalizationService(settings=test_settings, store=store)


@pytest.fixture
def add_translation(store):
    """Insert a value row, creating its key if needed.

    Usage:
        add_translation("Order.Status", "fr-FR", "Statut", tenant_id="T1")
    """

    def _add(key: str, culture: str, value: str, tenant_id: Optional[str] = None):
        with store.session() as session:
            session.ensure_key(key, is_system=False)
            session.add_value(key, culture, TenantScope.from_value(tenant_id), value)

    return _add
