"""Request context binding for structured logging.

Binds request-scoped metadata (correlation id, tenant, culture) to every log
entry emitted while a request is handled.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(tenant_id="T1", culture="fr-CA"):
        logger.info("resolving_strings")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    tenant_id: Optional[str] = None,
    culture: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind request-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique request identifier. Auto-generated if not provided.
        tenant_id: Tenant the request is scoped to (if any).
        culture: Culture resolved for the request (if known).
        request_path: HTTP request path.
        request_method: HTTP method.
        **extra_context: Additional key-value pairs to include in logs.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if tenant_id is not None:
        context["tenant_id"] = tenant_id
    if culture is not None:
        context["culture"] = culture
    if request_path is not None:
        context["request_path"] = request_path
    if request_method is not None:
        context["request_method"] = request_method

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    return structlog.contextvars.get_contextvars().get("correlation_id")


def clear_request_context() -> None:
    """Clear all request-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
