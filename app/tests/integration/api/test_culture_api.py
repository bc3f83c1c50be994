"""Integration tests for the culture selection endpoint."""

import pytest

COOKIE = ".AspNetCore.Culture"


@pytest.mark.integration
class TestSetCulture:
    """Tests for GET /culture/set."""

    def test_sets_cookie_and_redirects(self, client):
        """Test the culture cookie is set for a year before redirecting."""
        response = client.get(
            "/culture/set",
            params={"culture": "fr-FR", "returnUrl": "/orders?page=2"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/orders?page=2"
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{COOKIE}=")
        assert "c=fr-FR|uic=fr-FR" in set_cookie
        assert "Max-Age=31536000" in set_cookie

    @pytest.mark.parametrize(
        "return_url", ["https://evil.example.com/", "//evil.example.com", "/\\evil", "orders"]
    )
    def test_non_local_return_url_redirects_home(self, client, return_url):
        """Test a non-local return URL redirects to the site root."""
        response = client.get(
            "/culture/set",
            params={"culture": "fr-FR", "returnUrl": return_url},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/"

    def test_unsupported_culture_rejected(self, client):
        """Test an unsupported culture returns 400."""
        response = client.get("/culture/set", params={"culture": "de-DE"}, follow_redirects=False)
        assert response.status_code == 400

    def test_cookie_selects_culture_for_lookups(self, client, add_translation):
        """Test the cookie set here selects the culture of later lookups."""
        add_translation("Greeting", "fr-FR", "Bonjour")
        add_translation("Greeting", "en-US", "Hello")

        client.get("/culture/set", params={"culture": "fr-fr"}, follow_redirects=False)
        response = client.get("/api/v1/localization/strings/Greeting")

        assert response.json()["value"] == "Bonjour"
        assert response.json()["culture"] == "fr-FR"
