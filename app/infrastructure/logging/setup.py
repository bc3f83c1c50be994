"""Structlog configuration and logger setup.

Rendering depends on the environment: console output while developing, JSON
lines in production, nothing while pytest is running. Every event carries the
deployed git sha; request context (correlation id, tenant) is merged from
context variables bound by ``bind_request_context``.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("translation_resolved", key="Order.Status", culture="fr-FR")
"""

import inspect
import logging
import sys
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import EventDict, WrappedLogger

from infrastructure.configuration import settings

# Chatty libraries kept at WARNING unless the application itself logs at DEBUG
LIBRARY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "uvicorn.access")


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def add_deployment_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp each event with the deployed git sha and environment prefix."""
    event_dict.setdefault("git_sha", settings.GIT_SHA)
    if settings.PREFIX:
        event_dict.setdefault("environment", settings.PREFIX.rstrip("-_"))
    return event_dict


def _set_library_levels(level: int) -> None:
    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Args:
        log_level: Optional override for the level (DEBUG, INFO, WARNING, ...).
            Defaults to settings.LOG_LEVEL.
        is_production: Optional override of settings.is_production. Controls
            JSON vs console output.

    Returns:
        Configured logger instance.
    """
    if _is_test_environment():
        # Keep the processor chain valid but drop every record
        logging.root.setLevel(logging.CRITICAL + 1)
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    prod_mode = is_production if is_production is not None else settings.is_production
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_deployment_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if prod_mode else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level)
    _set_library_levels(level)

    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    Example:
        # In infrastructure/localization/seeder.py
        logger = get_module_logger()
        # context: {"component": "seeder",
        #           "module_path": "infrastructure.localization.seeder"}
    """
    current_frame = inspect.currentframe()
    frame = current_frame.f_back if current_frame is not None else None
    module = inspect.getmodule(frame) if frame is not None else None

    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.split(".")[-1],
        module_path=module.__name__,
    )
