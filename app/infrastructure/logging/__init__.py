"""Structured logging for the localization provider.

``get_module_logger()`` is the entry point for modules; the server binds
request context (correlation id, tenant, path) through
``bind_request_context`` so lookups and imports can be traced per request.
"""

from infrastructure.logging.context import (
    bind_request_context,
    clear_request_context,
    get_correlation_id,
)
from infrastructure.logging.setup import (
    add_deployment_context,
    configure_logging,
    get_module_logger,
)

__all__ = [
    "add_deployment_context",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "get_correlation_id",
    "get_module_logger",
]
