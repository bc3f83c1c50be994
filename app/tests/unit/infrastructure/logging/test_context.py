"""Unit tests for infrastructure.logging.context module."""

import uuid

import pytest
import structlog

from infrastructure.logging import (
    bind_request_context,
    clear_request_context,
    get_correlation_id,
)


@pytest.mark.unit
class TestBindRequestContext:
    """Test suite for bind_request_context context manager."""

    def test_auto_generates_correlation_id(self):
        """Test a UUID correlation id is generated when none is given."""
        with bind_request_context():
            uuid.UUID(get_correlation_id())

    def test_uses_provided_correlation_id(self):
        """Test a provided correlation id is bound as is."""
        with bind_request_context(correlation_id="req-123"):
            assert get_correlation_id() == "req-123"

    def test_binds_localization_context(self):
        """Test tenant, culture and request fields are bound."""
        with bind_request_context(
            tenant_id="T1",
            culture="fr-CA",
            request_path="/api/v1/localization/strings",
            request_method="GET",
            resource="orders",
        ):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["tenant_id"] == "T1"
            assert ctx["culture"] == "fr-CA"
            assert ctx["request_path"] == "/api/v1/localization/strings"
            assert ctx["request_method"] == "GET"
            assert ctx["resource"] == "orders"

    def test_omits_unset_values(self):
        """Test unset values are not bound."""
        with bind_request_context():
            ctx = structlog.contextvars.get_contextvars()
            assert "tenant_id" not in ctx
            assert "culture" not in ctx

    def test_context_cleared_on_exit(self):
        """Test the context is cleared when the block exits."""
        with bind_request_context(correlation_id="req-1", tenant_id="T1"):
            pass
        assert get_correlation_id() is None
        assert "tenant_id" not in structlog.contextvars.get_contextvars()

    def test_context_cleared_on_exception(self):
        """Test the context is cleared when the block raises."""
        with pytest.raises(ValueError):
            with bind_request_context(correlation_id="req-1"):
                raise ValueError("boom")
        assert get_correlation_id() is None


@pytest.mark.unit
def test_clear_request_context():
    """Test clear_request_context removes bound values."""
    structlog.contextvars.bind_contextvars(correlation_id="req-9")
    clear_request_context()
    assert get_correlation_id() is None
