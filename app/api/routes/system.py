from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.dependencies.rate_limits import SYSTEM_RATE_LIMIT, get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.services import LocalizationServiceDep, SettingsDep

logger = get_module_logger()

router = APIRouter(tags=["System"])
limiter = get_limiter()


# Polled by load balancers and orchestrators
@router.get("/version")
@limiter.limit(SYSTEM_RATE_LIMIT)
def get_version(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    """Get the deployed version and the cultures it serves."""
    return {
        "version": settings.GIT_SHA,
        "defaultCulture": settings.localization.default_culture,
        "supportedCultures": settings.localization.supported_cultures,
    }


@router.get("/health")
@limiter.limit(SYSTEM_RATE_LIMIT)
def get_health(request: Request, localization: LocalizationServiceDep):  # pylint: disable=unused-argument
    """Healthcheck endpoint; reports 503 when the translation store is unreachable."""
    try:
        with localization.store.session() as session:
            translations = session.count_values()
    except SQLAlchemyError as e:
        logger.error("health_check_failed", error=str(e))
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok", "translations": translations}
