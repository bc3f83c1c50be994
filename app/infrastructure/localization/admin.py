"""Administrative operations on stored translations.

CRUD over individual value rows plus bulk CSV/JSON export and upserting
import. Every operation runs in its own store session.
"""

from typing import Iterable, List, Optional

from infrastructure.localization import codecs
from infrastructure.localization.exceptions import (
    DuplicateTranslationError,
    TranslationNotFoundError,
)
from infrastructure.localization.models import (
    TenantScope,
    TranslationRecord,
    normalize_culture,
)
from infrastructure.localization.store import LocalizationStore
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class TranslationAdminService:
    """CRUD and bulk import/export of translation rows.

    Records are normalized before they are written or previewed:
    key, culture and tenant are trimmed, a blank tenant means global, a
    missing culture becomes ``default_culture`` and a missing value becomes
    an empty string. Records left without a key or culture are dropped.

    Attributes:
        store: LocalizationStore to administer.
        default_culture: Culture assumed for records that carry none.
    """

    def __init__(self, store: LocalizationStore, default_culture: str = "en-US"):
        self.store = store
        self.default_culture = normalize_culture(default_culture) or "en-US"

    def normalize(
        self,
        key: Optional[str],
        culture: Optional[str],
        tenant_id: Optional[str],
        value: Optional[str],
    ) -> Optional[TranslationRecord]:
        """Normalize raw fields into a record, or None if key or culture is blank."""
        key = (key or "").strip()
        culture = normalize_culture(self.default_culture if culture is None else culture)
        if not key or not culture:
            return None
        return TranslationRecord(
            key=key,
            culture=culture,
            tenant_id=TenantScope.from_value(tenant_id).tenant_id,
            value="" if value is None else value,
        )

    def _normalize_record(self, record: TranslationRecord) -> TranslationRecord:
        normalized = self.normalize(record.key, record.culture, record.tenant_id, record.value)
        if normalized is None:
            raise ValueError("A translation requires a key and a culture")
        return normalized

    # CRUD

    def list(
        self,
        tenant_id: Optional[str] = None,
        culture: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[TranslationRecord]:
        """List rows of exactly one tenant scope, ordered by culture then key.

        Args:
            tenant_id: Tenant to list; None or blank lists global rows.
            culture: Optional culture filter.
            search: Optional substring matched against key or value.
        """
        culture = normalize_culture(culture) or None
        search = search.strip() if search and search.strip() else None
        with self.store.session() as session:
            return session.list_values(TenantScope.from_value(tenant_id), culture, search)

    def get(self, value_id: int) -> Optional[TranslationRecord]:
        with self.store.session() as session:
            return session.get_value_by_id(value_id)

    def create(self, record: TranslationRecord) -> int:
        """Create a value row, creating its key if needed.

        Raises:
            ValueError: If the record has no key or culture.
            DuplicateTranslationError: If the row already exists.

        Returns:
            Identifier of the new row.
        """
        record = self._normalize_record(record)
        with self.store.session() as session:
            session.ensure_key(record.key, is_system=False)
            if not session.add_value(record.key, record.culture, record.tenant, record.value):
                raise DuplicateTranslationError(
                    f"Translation {record.key!r} already exists for "
                    f"{record.culture} ({record.tenant})"
                )
            created = session.get_value(record.key, record.culture, record.tenant)

        logger.info(
            "translation_created",
            key=record.key,
            culture=record.culture,
            tenant=str(record.tenant),
        )
        return created.id

    def update(self, value_id: int, record: TranslationRecord) -> TranslationRecord:
        """Replace the key, culture, tenant and value of an existing row.

        Raises:
            TranslationNotFoundError: If no row has ``value_id``.
            DuplicateTranslationError: If another row already holds the
                target (key, culture, tenant).
        """
        record = self._normalize_record(record)
        with self.store.session() as session:
            if not session.update_value_by_id(value_id, record):
                raise TranslationNotFoundError(value_id)
            updated = session.get_value_by_id(value_id)

        logger.info("translation_updated", value_id=value_id, key=record.key)
        return updated

    def delete(self, value_id: int) -> bool:
        """Delete a value row; a missing id is a no-op returning False."""
        with self.store.session() as session:
            deleted = session.delete_value(value_id)
        if deleted:
            logger.info("translation_deleted", value_id=value_id)
        return deleted

    def delete_key(self, key: str) -> bool:
        """Delete a key together with all of its values."""
        with self.store.session() as session:
            deleted = session.delete_key(key.strip())
        if deleted:
            logger.info("localization_key_deleted", key=key)
        return deleted

    # Export

    def export_csv(
        self,
        tenant_id: Optional[str] = None,
        culture: Optional[str] = None,
        search: Optional[str] = None,
    ) -> str:
        """Export the rows selected like ``list`` as CSV text."""
        return codecs.records_to_csv(self.list(tenant_id, culture, search))

    def export_json(
        self,
        tenant_id: Optional[str] = None,
        culture: Optional[str] = None,
        search: Optional[str] = None,
    ) -> str:
        """Export the rows selected like ``list`` as a JSON array."""
        return codecs.records_to_json(self.list(tenant_id, culture, search))

    # Preview and import

    def _normalize_rows(self, rows: Iterable[codecs.RawRow]) -> List[TranslationRecord]:
        records = []
        for row in rows:
            record = self.normalize(row["key"], row["culture"], row["tenantid"], row["value"])
            if record is None:
                logger.debug("import_row_skipped", key=row["key"], culture=row["culture"])
                continue
            records.append(record)
        return records

    def preview_csv(self, text: str) -> List[TranslationRecord]:
        """Parse and normalize CSV text without writing anything."""
        return self._normalize_rows(codecs.parse_csv(text))

    def preview_json(self, text: str) -> List[TranslationRecord]:
        """Parse and normalize a JSON array without writing anything.

        Raises:
            InvalidImportError: If the payload is not a JSON array.
        """
        return self._normalize_rows(codecs.parse_json(text))

    def import_csv(self, text: str) -> int:
        """Upsert the rows of a CSV document. Returns the number of rows upserted."""
        return self._upsert_many(self.preview_csv(text), source="csv")

    def import_json(self, text: str) -> int:
        """Upsert the rows of a JSON array. Returns the number of rows upserted.

        Raises:
            InvalidImportError: If the payload is not a JSON array.
        """
        return self._upsert_many(self.preview_json(text), source="json")

    def _upsert_many(self, records: List[TranslationRecord], source: str) -> int:
        if not records:
            return 0

        upserted = 0
        with self.store.session() as session:
            for record in records:
                session.ensure_key(record.key, is_system=False)
                if not session.add_value(record.key, record.culture, record.tenant, record.value):
                    session.set_value(record.key, record.culture, record.tenant, record.value)
                upserted += 1

        logger.info("translations_imported", source=source, rows_upserted=upserted)
        return upserted
