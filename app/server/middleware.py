from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.logging import bind_request_context, get_correlation_id

CORRELATION_HEADER = "X-Correlation-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind correlation id, tenant, path and method to every log of a request."""

    def __init__(self, app, tenant_header: str = "X-Tenant-Id"):
        super().__init__(app)
        self.tenant_header = tenant_header

    async def dispatch(self, request, call_next):
        tenant = request.headers.get(self.tenant_header)
        with bind_request_context(
            correlation_id=request.headers.get(CORRELATION_HEADER),
            tenant_id=tenant.strip() if tenant and tenant.strip() else None,
            request_path=request.url.path,
            request_method=request.method,
        ):
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = get_correlation_id() or ""
        return response
