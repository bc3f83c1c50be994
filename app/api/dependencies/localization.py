"""Request-scoped localization dependencies.

Resolve the culture and tenant of the current request so routes receive
plain values.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request

from infrastructure.localization import DatabaseStringLocalizer
from infrastructure.services import LocalizationServiceDep, SettingsDep


def get_request_culture(
    request: Request,
    localization: LocalizationServiceDep,
    settings: SettingsDep,
) -> str:
    """Culture from the culture cookie, then the query string, then Accept-Language."""
    return localization.resolve_request_culture(
        cookie_value=request.cookies.get(settings.server.CULTURE_COOKIE_NAME),
        query_culture=request.query_params.get(settings.server.CULTURE_QUERY_PARAMETER),
        accept_language=request.headers.get("accept-language"),
    )


def get_request_tenant(request: Request, settings: SettingsDep) -> Optional[str]:
    """Tenant from the tenant header, else the configured tenant (None is global)."""
    tenant = request.headers.get(settings.server.TENANT_HEADER)
    if tenant and tenant.strip():
        return tenant.strip()
    return settings.localization.tenant_id


RequestCultureDep = Annotated[str, Depends(get_request_culture)]
RequestTenantDep = Annotated[Optional[str], Depends(get_request_tenant)]


def get_request_localizer(
    localization: LocalizationServiceDep,
    culture: RequestCultureDep,
    tenant_id: RequestTenantDep,
) -> DatabaseStringLocalizer:
    return localization.localizer(culture=culture, tenant_id=tenant_id)


RequestLocalizerDep = Annotated[DatabaseStringLocalizer, Depends(get_request_localizer)]
