from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import get_localization_service, get_settings

if TYPE_CHECKING:
    from infrastructure.configuration import Settings
    from infrastructure.localization import LocalizationService


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(
        log_level=settings.LOG_LEVEL, is_production=settings.is_production
    )


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    base_settings = []
    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            logger.info("configuration_loaded", config_setting=key, keys=list(value.keys()))
        else:
            base_settings.append({key: value})
    logger.info("configuration_initialized", base_settings=base_settings)

    # Section values, except the database URL which may carry credentials
    localization = settings.localization
    logger.info(
        "localization_configured",
        default_culture=localization.default_culture,
        supported_cultures=localization.supported_cultures,
        culture_fallback=localization.enable_culture_fallback,
        tenant_id=localization.tenant_id,
        database_provider=settings.database.provider,
    )


def _initialize_localization(
    app: FastAPI,
    logger: BoundLogger,
) -> "LocalizationService":
    try:
        localization = get_localization_service()
        seeded = localization.initialize()
    except Exception as exc:
        logger.error("localization_initialization_failed", error=str(exc))
        raise

    app.state.localization = localization
    logger.info(
        "localization_initialized",
        seeded_rows=seeded,
        supported_cultures=localization.supported_cultures(),
    )
    return localization


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)

    localization = _initialize_localization(app, logger)

    yield

    logger.info("application_shutdown")
    localization.store.engine.dispose()
