"""
Root-level conftest.py for integration tests.

Provides a FastAPI TestClient whose localization dependencies point at an
in-memory store, so requests exercise routes, dependencies and the
localization core together.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies.rate_limits import get_limiter
from infrastructure.services.providers import get_localization_service, get_settings
from server.server import handler


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with empty rate limit counters."""
    get_limiter().reset()
    yield


@pytest.fixture
def app(test_settings, localization_service):
    """Application with settings and localization service overridden."""
    handler.dependency_overrides[get_settings] = lambda: test_settings
    handler.dependency_overrides[get_localization_service] = lambda: localization_service
    yield handler
    handler.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """TestClient without lifespan; the store fixture already holds the schema."""
    return TestClient(app)
