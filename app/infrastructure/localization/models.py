"""Localization models.

Value types shared by the resolver, seeder, admin service and store
implementations. Persistence mappings live in ``schema``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


def _canonical_subtag(subtag: str, position: int) -> str:
    if position == 0:
        return subtag.lower()
    if len(subtag) == 4 and subtag.isalpha():
        return subtag.title()
    if (len(subtag) == 2 and subtag.isalpha()) or (len(subtag) == 3 and subtag.isdigit()):
        return subtag.upper()
    return subtag.lower()


def normalize_culture(culture: Optional[str]) -> str:
    """Normalize a culture identifier to its canonical spelling.

    Language is lowercase, script title case and region uppercase, so
    " fr_ca " becomes "fr-CA" and "ZH-hant-tw" becomes "zh-Hant-TW". Stored
    and requested cultures both go through this function.

    Returns an empty string for a missing or blank culture.
    """
    if culture is None:
        return ""
    subtags = [s for s in culture.strip().replace("_", "-").split("-") if s]
    return "-".join(_canonical_subtag(s, i) for i, s in enumerate(subtags))


@dataclass(frozen=True)
class TenantScope:
    """Tenant scope of a translation: global (shared) or a single tenant.

    Frozen so scopes can be compared and used as dictionary keys.

    Attributes:
        tenant_id: Tenant identifier, or None for the global scope.
    """

    tenant_id: Optional[str] = None

    @classmethod
    def from_value(cls, tenant_id: Optional[str]) -> "TenantScope":
        """Build a scope from a nullable tenant id; blank ids mean global."""
        if tenant_id is None or not str(tenant_id).strip():
            return GLOBAL
        return cls(tenant_id=str(tenant_id).strip())

    @classmethod
    def tenant(cls, tenant_id: str) -> "TenantScope":
        """Build a tenant scope.

        Raises:
            ValueError: If tenant_id is blank.
        """
        if not tenant_id or not tenant_id.strip():
            raise ValueError("Tenant id must not be blank")
        return cls(tenant_id=tenant_id.strip())

    @property
    def is_global(self) -> bool:
        return self.tenant_id is None

    def __str__(self) -> str:
        return "global" if self.tenant_id is None else f"tenant:{self.tenant_id}"


GLOBAL = TenantScope()


@dataclass(frozen=True)
class LocalizedString:
    """Result of a translation lookup.

    Attributes:
        name: The requested resource key.
        value: Resolved text, or the key itself when nothing was found.
        resource_not_found: True when no translation matched.
    """

    name: str
    value: str
    resource_not_found: bool = False

    @property
    def found(self) -> bool:
        return not self.resource_not_found

    def as_tuple(self) -> Tuple[str, bool]:
        """Return ``(value, found)``."""
        return self.value, self.found

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LocalizableFieldDescriptor:
    """Declares a field whose keys must exist in the localization store.

    Replaces attribute scanning: applications register descriptors explicitly
    at startup (in code or via ``YAMLDescriptorLoader``).

    Attributes:
        owner: Name of the type owning the field (e.g. "Order").
        field_name: Field identifier (e.g. "Status"); used for default values.
        key: Primary resource key (e.g. "Order.Status").
        display_name_key: Optional key for the field's display name.
        display_message_key: Optional key for an informational message.
        error_message_key: Optional key for a validation error message.
        culture: Optional fixed culture; when set, only this culture is seeded.
        fallback_to_default: Apply the key itself when no translation exists.
    """

    owner: str
    field_name: str
    key: str
    display_name_key: Optional[str] = None
    display_message_key: Optional[str] = None
    error_message_key: Optional[str] = None
    culture: Optional[str] = None
    fallback_to_default: bool = True

    @classmethod
    def for_field(cls, owner: str, field_name: str, **kwargs: Any) -> "LocalizableFieldDescriptor":
        """Create a descriptor whose primary key defaults to ``Owner.Field``."""
        key = kwargs.pop("key", None) or f"{owner}.{field_name}"
        return cls(owner=owner, field_name=field_name, key=key, **kwargs)

    def all_keys(self) -> List[str]:
        """Primary key plus non-empty secondary keys, de-duplicated case-insensitively."""
        keys: List[str] = []
        seen = set()
        for candidate in (
            self.key,
            self.display_name_key,
            self.display_message_key,
            self.error_message_key,
        ):
            if candidate is None or not candidate.strip():
                continue
            candidate = candidate.strip()
            if candidate.lower() in seen:
                continue
            seen.add(candidate.lower())
            keys.append(candidate)
        return keys


@dataclass
class TranslationRecord:
    """Flat view of one stored value: (key, culture, tenant, value).

    Used by the admin service, the import/export codecs and store queries.

    Attributes:
        key: Resource key.
        culture: Culture identifier.
        tenant_id: Owning tenant, or None for global rows.
        value: Translated text.
        id: Store identifier of the value row, when persisted.
    """

    key: str
    culture: str
    tenant_id: Optional[str] = None
    value: str = ""
    id: Optional[int] = field(default=None, compare=False)

    @property
    def tenant(self) -> TenantScope:
        return TenantScope.from_value(self.tenant_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the lower-camel field names of the JSON format."""
        return {
            "key": self.key,
            "culture": self.culture,
            "tenantId": self.tenant_id,
            "value": self.value,
        }
