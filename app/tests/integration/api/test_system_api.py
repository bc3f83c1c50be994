"""Integration tests for the system endpoints."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from infrastructure.services.providers import get_localization_service


@pytest.mark.integration
def test_health(client, add_translation):
    """Test /health reports ok with the translation count."""
    add_translation("Greeting", "en-US", "Hello")

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "translations": 1}


@pytest.mark.integration
def test_health_store_unreachable(app, client):
    """Test /health returns 503 when the store is unreachable."""
    broken = MagicMock()
    broken.store.session.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
    app.dependency_overrides[get_localization_service] = lambda: broken

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unavailable"}


@pytest.mark.integration
def test_version(client, test_settings):
    """Test /version reports the git sha and configured cultures."""
    response = client.get("/version")

    assert response.status_code == 200
    assert response.json() == {
        "version": test_settings.GIT_SHA,
        "defaultCulture": "en-US",
        "supportedCultures": ["en-US", "fr-FR", "fr-CA"],
    }


@pytest.mark.integration
def test_health_rate_limited(client):
    """Test /health returns 429 past fifty calls a minute."""
    for _ in range(50):
        assert client.get("/health").status_code == 200

    response = client.get("/health")

    assert response.status_code == 429
    assert response.json() == {"message": "Rate limit exceeded"}


@pytest.mark.integration
def test_correlation_id_header(client):
    """Test a supplied X-Correlation-Id is echoed back."""
    response = client.get("/health", headers={"X-Correlation-Id": "req-42"})
    assert response.headers["X-Correlation-Id"] == "req-42"


@pytest.mark.integration
def test_correlation_id_generated(client):
    """Test a correlation id is generated when none is supplied."""
    response = client.get("/health")
    assert response.headers["X-Correlation-Id"]
