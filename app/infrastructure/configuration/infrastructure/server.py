"""HTTP server infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """Server and request culture selection configuration.

    Environment Variables:
        CULTURE_COOKIE_NAME: Cookie carrying the selected culture
            (default: .AspNetCore.Culture)
        CULTURE_QUERY_PARAMETER: Query parameter overriding the culture
            (default: culture)
        TENANT_HEADER: Request header carrying the tenant id
            (default: X-Tenant-Id)
        CULTURE_COOKIE_MAX_AGE_DAYS: Lifetime of the culture cookie (default: 365)

    Example:
        ```python
        from infrastructure.services import get_settings

        cookie_name = get_settings().server.CULTURE_COOKIE_NAME
        ```
    """

    CULTURE_COOKIE_NAME: str = Field(
        default=".AspNetCore.Culture", alias="CULTURE_COOKIE_NAME"
    )
    CULTURE_QUERY_PARAMETER: str = Field(
        default="culture", alias="CULTURE_QUERY_PARAMETER"
    )
    TENANT_HEADER: str = Field(default="X-Tenant-Id", alias="TENANT_HEADER")
    CULTURE_COOKIE_MAX_AGE_DAYS: int = Field(
        default=365, alias="CULTURE_COOKIE_MAX_AGE_DAYS"
    )
