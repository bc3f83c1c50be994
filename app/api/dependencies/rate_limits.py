"""Request rate limiting.

Requests are counted per tenant when the tenant header is present and per
client address otherwise.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from infrastructure.logging import get_module_logger
from infrastructure.services.providers import get_settings

logger = get_module_logger()

SYSTEM_RATE_LIMIT = "50/minute"
IMPORT_RATE_LIMIT = "10/minute"


def tenant_or_remote_address(request: Request) -> str:
    """Rate limit key: the request tenant when present, else the client address."""
    tenant = request.headers.get(get_settings().server.TENANT_HEADER)
    if tenant and tenant.strip():
        return f"tenant:{tenant.strip()}"
    return get_remote_address(request)


limiter = Limiter(key_func=tenant_or_remote_address)


async def rate_limit_handler(request: Request, exc: Exception):
    """Return a 429 status code with a short error message."""
    if isinstance(exc, RateLimitExceeded):
        logger.warning(
            "rate_limit_exceeded",
            limit_key=tenant_or_remote_address(request),
            path=request.url.path,
            detail=exc.detail,
        )
        return JSONResponse(
            status_code=429,
            content={"message": "Rate limit exceeded"},
        )


def setup_rate_limiter(app: FastAPI):
    """Attach the shared limiter and its 429 handler to ``app``."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter() -> Limiter:
    return limiter
