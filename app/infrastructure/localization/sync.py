"""Explicit synchronization of entity field values into the store.

Owning services call ``LocalizationSync.sync`` when they persist an entity
whose fields are described by ``LocalizableFieldDescriptor`` values. For each
descriptor the current field value and the generated secondary texts are
upserted for the entity's culture and tenant.
"""

from typing import Any, Iterable, List, Optional, Tuple

from infrastructure.localization.models import (
    LocalizableFieldDescriptor,
    TenantScope,
    normalize_culture,
)
from infrastructure.localization.seeder import apply_key_prefix
from infrastructure.localization.store import LocalizationSession, LocalizationStore
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def texts_for(descriptor: LocalizableFieldDescriptor, field_value: Any) -> List[Tuple[str, str]]:
    """Return the (key, text) pairs written for one descriptor.

    - primary key: the field's current value ("" for None)
    - error message key: "<field> is required"
    - display name key: the field name
    - display message key: "Info about <field>"
    """
    field = descriptor.field_name
    pairs = [(descriptor.key, "" if field_value is None else str(field_value))]
    if descriptor.error_message_key:
        pairs.append((descriptor.error_message_key, f"{field} is required"))
    if descriptor.display_name_key:
        pairs.append((descriptor.display_name_key, field))
    if descriptor.display_message_key:
        pairs.append((descriptor.display_message_key, f"Info about {field}"))
    return pairs


class LocalizationSync:
    """Upserts translations for entity fields at the point the entity is saved.

    Attributes:
        store: LocalizationStore receiving the values.
        key_prefix: Optional prefix applied to descriptor keys.
    """

    def __init__(self, store: LocalizationStore, key_prefix: Optional[str] = None):
        self.store = store
        self.key_prefix = key_prefix

    def sync(
        self,
        entity: Any,
        descriptors: Iterable[LocalizableFieldDescriptor],
        culture: str,
        tenant_id: Optional[str] = None,
    ) -> int:
        """Upsert the entity's localized fields.

        Args:
            entity: Object carrying the described fields as attributes.
            descriptors: Descriptors of the entity's localizable fields.
            culture: Culture of the entity's values; a descriptor's fixed
                culture takes precedence.
            tenant_id: Tenant owning the values; None for global.

        Returns:
            Number of value rows inserted or changed.
        """
        tenant = TenantScope.from_value(tenant_id)
        changed = 0

        with self.store.session() as session:
            for descriptor in descriptors:
                target_culture = normalize_culture(descriptor.culture) or normalize_culture(
                    culture
                )
                field_value = getattr(entity, descriptor.field_name, None)
                for key, text in texts_for(descriptor, field_value):
                    full_key = apply_key_prefix(key.strip(), self.key_prefix)
                    if self._upsert(session, full_key, target_culture, tenant, text):
                        changed += 1

        logger.info(
            "entity_localization_synced",
            entity_type=type(entity).__name__,
            culture=normalize_culture(culture),
            tenant=str(tenant),
            rows_changed=changed,
        )
        return changed

    @staticmethod
    def _upsert(
        session: LocalizationSession,
        key: str,
        culture: str,
        tenant: TenantScope,
        text: str,
    ) -> bool:
        session.ensure_key(key, is_system=True)
        if session.add_value(key, culture, tenant, text):
            return True
        existing = session.get_value(key, culture, tenant)
        if existing is not None and existing.value != text:
            return session.set_value(key, culture, tenant, text)
        return False
