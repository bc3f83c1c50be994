"""Localization feature settings."""

import json
from typing import Annotated, Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import NoDecode

from infrastructure.configuration.base import FeatureSettings, blank_to_none


class LocalizationSettings(FeatureSettings):
    """Culture, fallback and tenant behaviour of the localization provider.

    Environment Variables:
        LOCALIZATION_DEFAULT_CULTURE: Culture used when none is resolved and as
            the last fallback step (default: en-US)
        LOCALIZATION_SUPPORTED_CULTURES: JSON list or comma separated cultures
            offered to clients and seeded by default (default: ["en-US"])
        LOCALIZATION_ENABLE_CULTURE_FALLBACK: Walk parent cultures and then the
            default culture when a value is missing (default: true)
        LOCALIZATION_TENANT_ID: Tenant used when a request does not name one
        LOCALIZATION_KEY_PREFIX: Optional prefix applied to descriptor keys
        LOCALIZATION_DESCRIPTORS_DIR: Directory of YAML field descriptor files

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.localization.enable_culture_fallback:
            default = settings.localization.default_culture
        ```
    """

    default_culture: str = Field(
        default="en-US",
        alias="LOCALIZATION_DEFAULT_CULTURE",
        description="Culture used when no explicit culture is resolved",
    )
    supported_cultures: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["en-US"],
        alias="LOCALIZATION_SUPPORTED_CULTURES",
        description="Cultures offered for selection and seeding",
    )
    enable_culture_fallback: bool = Field(
        default=True,
        alias="LOCALIZATION_ENABLE_CULTURE_FALLBACK",
        description="Fall back to parent cultures, then the default culture",
    )
    tenant_id: Optional[str] = Field(
        default=None,
        alias="LOCALIZATION_TENANT_ID",
        description="Tenant scope used when a caller does not supply one",
    )
    key_prefix: Optional[str] = Field(
        default=None,
        alias="LOCALIZATION_KEY_PREFIX",
        description="Prefix prepended to generated translation keys",
    )
    descriptors_dir: Optional[str] = Field(
        default=None,
        alias="LOCALIZATION_DESCRIPTORS_DIR",
        description="Directory containing YAML localizable field descriptors",
    )

    @field_validator("supported_cultures", mode="before")
    @classmethod
    def _parse_supported_cultures(cls, v: Optional[Any]) -> Any:
        """Parse LOCALIZATION_SUPPORTED_CULTURES from JSON, CSV string or list."""
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return [str(c).strip() for c in v if str(c).strip()]
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                try:
                    parsed = json.loads(s)
                except (json.JSONDecodeError, ValueError) as e:
                    raise ValueError(
                        f"Invalid LOCALIZATION_SUPPORTED_CULTURES JSON: {e}"
                    ) from e
                return [str(c).strip() for c in parsed if str(c).strip()]
            return [c.strip() for c in s.split(",") if c.strip()]
        raise ValueError(
            "LOCALIZATION_SUPPORTED_CULTURES must be a JSON list or comma separated string"
        )

    @field_validator("tenant_id", "key_prefix", "descriptors_dir", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)

    @field_validator("default_culture", mode="after")
    @classmethod
    def _validate_default_culture(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("LOCALIZATION_DEFAULT_CULTURE must not be empty")
        return v
