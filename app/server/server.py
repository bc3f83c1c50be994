from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.dependencies.rate_limits import setup_rate_limiter
from api.router import api_router
from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings
from server.lifespan import lifespan
from server.middleware import RequestContextMiddleware

logger = get_module_logger()
settings = get_settings()


async def store_unavailable_handler(request: Request, exc: Exception):
    """Return 503 when the translation store fails during a request."""
    logger.error(
        "translation_store_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(
        status_code=503,
        content={"message": "Translation store unavailable"},
    )


handler = FastAPI(title="Localization", lifespan=lifespan)
setup_rate_limiter(handler)
handler.add_exception_handler(SQLAlchemyError, store_unavailable_handler)


allow_origins = (
    ["*"]
    if settings.is_production
    else [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]
)
handler.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
handler.add_middleware(
    RequestContextMiddleware, tenant_header=settings.server.TENANT_HEADER
)


handler.include_router(api_router)
