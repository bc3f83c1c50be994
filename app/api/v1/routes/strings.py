"""Localized string lookup endpoints."""

from typing import Dict, List, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from api.dependencies.localization import (
    RequestCultureDep,
    RequestLocalizerDep,
    RequestTenantDep,
)

router = APIRouter(prefix="/localization", tags=["Localization"])


class LocalizedStringResponse(BaseModel):
    name: str
    value: str
    resourceNotFound: bool
    culture: str
    tenantId: Optional[str] = None


class AllStringsResponse(BaseModel):
    culture: str
    tenantId: Optional[str] = None
    strings: Dict[str, str]


@router.get("/strings/{key}", response_model=LocalizedStringResponse)
def get_string(
    key: str,
    localizer: RequestLocalizerDep,
    culture: RequestCultureDep,
    tenant_id: RequestTenantDep,
    args: Optional[List[str]] = Query(None),
):
    """Resolve one key for the request culture and tenant.

    Positional ``args`` query values fill ``{0}``, ``{1}``... placeholders.
    A missing key is not an error: the key is returned with
    ``resourceNotFound`` set.
    """
    localized = localizer.resolve(key, *(args or []))
    return LocalizedStringResponse(
        name=localized.name,
        value=localized.value,
        resourceNotFound=localized.resource_not_found,
        culture=culture,
        tenantId=tenant_id,
    )


@router.get("/strings", response_model=AllStringsResponse)
def get_all_strings(
    localizer: RequestLocalizerDep,
    culture: RequestCultureDep,
    tenant_id: RequestTenantDep,
    include_parent_cultures: bool = Query(True, alias="includeParentCultures"),
):
    """Resolve every key visible to the request culture and tenant."""
    return AllStringsResponse(
        culture=culture,
        tenantId=tenant_id,
        strings=localizer.all_strings(include_parent_cultures),
    )
