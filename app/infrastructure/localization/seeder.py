"""Seeding of localization keys and default values from field descriptors.

The seeder makes sure every key declared by a ``LocalizableFieldDescriptor``
exists with a value for each requested culture, so lookups never hit missing
keys at runtime. Seeding with ``overwrite=False`` is idempotent.
"""

from typing import Iterable, List, Optional, Sequence

from infrastructure.localization.models import (
    LocalizableFieldDescriptor,
    TenantScope,
    normalize_culture,
)
from infrastructure.localization.store import LocalizationSession, LocalizationStore
from infrastructure.logging import get_module_logger

logger = get_module_logger()

GENERIC_KEY_SUFFIXES = ("display", "name", "label")


def default_value_for(key: str, field_name: str) -> str:
    """Derive a readable default value for a generated key.

    Uses the last dot-delimited segment of the key, unless that segment is a
    generic suffix (Display, Name, Label) or empty, in which case the field
    name is used instead. Best effort: values are meant to be edited later.

    Example:
        default_value_for("Order.Status.Display", "Status")  # "Status"
        default_value_for("Order.Status", "Status")          # "Status"
        default_value_for("Order.Status.Error", "Status")    # "Error"
    """
    segments = [s for s in key.split(".") if s.strip()]
    if not segments:
        return field_name

    last = segments[-1].strip()
    if last.lower() in GENERIC_KEY_SUFFIXES:
        return field_name
    return last


def normalize_cultures(cultures: Iterable[Optional[str]]) -> List[str]:
    """Trim, drop blanks and de-duplicate cultures case-insensitively, keeping order."""
    result: List[str] = []
    seen = set()
    for culture in cultures:
        culture = normalize_culture(culture)
        if not culture or culture.lower() in seen:
            continue
        seen.add(culture.lower())
        result.append(culture)
    return result


def apply_key_prefix(key: str, key_prefix: Optional[str]) -> str:
    """Prepend ``key_prefix`` to a key unless it already carries it."""
    if not key_prefix:
        return key
    prefix = key_prefix.rstrip(".")
    if key == prefix or key.startswith(prefix + "."):
        return key
    return f"{prefix}.{key}"


class LocalizationSeeder:
    """Ensures descriptor keys and default values exist in the store.

    Attributes:
        store: LocalizationStore to seed.
        key_prefix: Optional prefix applied to every descriptor key.
    """

    def __init__(self, store: LocalizationStore, key_prefix: Optional[str] = None):
        self.store = store
        self.key_prefix = key_prefix

    def seed(
        self,
        descriptors: Iterable[LocalizableFieldDescriptor],
        cultures: Sequence[str],
        tenant_id: Optional[str] = None,
        overwrite: bool = False,
    ) -> int:
        """Seed keys and default values for every descriptor and culture.

        A descriptor with a fixed ``culture`` is seeded for that culture only.
        Missing keys are created as system keys. A missing value is inserted
        with ``default_value_for``; an existing value is replaced only when
        ``overwrite`` is set or the stored value is blank.

        Args:
            descriptors: Field descriptors to seed.
            cultures: Cultures to seed when a descriptor has no fixed culture.
            tenant_id: Tenant to seed values for; None seeds global values.
            overwrite: Replace existing non-blank values.

        Returns:
            Number of value rows inserted or updated.
        """
        requested = normalize_cultures(cultures)
        tenant = TenantScope.from_value(tenant_id)
        touched = 0
        keys_created = 0

        with self.store.session() as session:
            for descriptor in descriptors:
                descriptor_cultures = (
                    normalize_cultures([descriptor.culture])
                    if descriptor.culture and descriptor.culture.strip()
                    else requested
                )

                for key in descriptor.all_keys():
                    full_key = apply_key_prefix(key, self.key_prefix)
                    if session.ensure_key(full_key, is_system=True):
                        keys_created += 1

                    default_value = default_value_for(key, descriptor.field_name)
                    for culture in descriptor_cultures:
                        if self._seed_value(
                            session, full_key, culture, tenant, default_value, overwrite
                        ):
                            touched += 1

        logger.info(
            "seed_completed",
            tenant=str(tenant),
            cultures=requested,
            keys_created=keys_created,
            rows_touched=touched,
            overwrite=overwrite,
        )
        return touched

    @staticmethod
    def _seed_value(
        session: LocalizationSession,
        key: str,
        culture: str,
        tenant: TenantScope,
        value: str,
        overwrite: bool,
    ) -> bool:
        if session.add_value(key, culture, tenant, value):
            return True

        existing = session.get_value(key, culture, tenant)
        if existing is None:
            return False
        if existing.value == value:
            return False
        if overwrite or not existing.value.strip():
            return session.set_value(key, culture, tenant, value)
        return False
