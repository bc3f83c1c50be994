"""Localization database infrastructure settings."""

from typing import Optional

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings, blank_to_none


class DatabaseSettings(InfrastructureSettings):
    """Connection settings for the relational store holding translations.

    Environment Variables:
        LOCALIZATION_DB_PROVIDER: One of sqlite, postgresql, mysql, sqlserver
            (aliases: localdb, npgsql, mariadb). Default: sqlite
        LOCALIZATION_DB_URL: SQLAlchemy database URL for the selected provider
        LOCALIZATION_DB_ECHO: Log emitted SQL statements (default: false)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        url = settings.database.url
        ```
    """

    provider: str = Field(default="sqlite", alias="LOCALIZATION_DB_PROVIDER")
    url: Optional[str] = Field(
        default="sqlite:///localization.db", alias="LOCALIZATION_DB_URL"
    )
    echo: bool = Field(default=False, alias="LOCALIZATION_DB_ECHO")

    @field_validator("provider", mode="before")
    @classmethod
    def _normalize_provider(cls, v: Optional[str]) -> str:
        return (v or "").strip().lower()

    @field_validator("url", mode="before")
    @classmethod
    def _blank_url_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)
