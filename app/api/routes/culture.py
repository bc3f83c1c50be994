"""Culture selection route.

Stores the chosen culture in the culture cookie and redirects back to the
page the user came from.
"""

from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import RedirectResponse

from infrastructure.localization import make_culture_cookie
from infrastructure.logging import get_module_logger
from infrastructure.services import LocalizationServiceDep, SettingsDep

logger = get_module_logger()

router = APIRouter(tags=["Culture"])


def is_local_url(url: str) -> bool:
    """True for an application-relative URL ("/orders"), False for anything else."""
    if not url or not url.startswith("/"):
        return False
    return not url.startswith("//") and not url.startswith("/\\")


@router.get("/culture/set")
def set_culture(
    localization: LocalizationServiceDep,
    settings: SettingsDep,
    culture: str = Query(..., min_length=1),
    return_url: str = Query("/", alias="returnUrl"),
):
    """Persist the selected culture in a cookie and redirect to ``returnUrl``.

    Only relative return URLs are followed; anything else redirects to "/".
    """
    selected = localization.culture_resolver.match_supported(culture)
    if selected is None:
        raise HTTPException(status_code=400, detail=f"Unsupported culture: {culture}")

    target = return_url if is_local_url(return_url) else "/"
    max_age = timedelta(days=settings.server.CULTURE_COOKIE_MAX_AGE_DAYS)

    response = RedirectResponse(url=target, status_code=302)
    response.set_cookie(
        key=settings.server.CULTURE_COOKIE_NAME,
        value=make_culture_cookie(selected),
        max_age=int(max_age.total_seconds()),
        expires=datetime.now(timezone.utc) + max_age,
        path="/",
        samesite="lax",
    )

    logger.info("culture_selected", culture=selected, redirect=target)
    return response
