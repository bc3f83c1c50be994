"""Tests for infrastructure.localization.admin module."""

import pytest

from infrastructure.localization import (
    DuplicateTranslationError,
    InvalidImportError,
    TranslationAdminService,
    TranslationNotFoundError,
    TranslationRecord,
)


@pytest.fixture
def admin(store):
    return TranslationAdminService(store, default_culture="en-US")


@pytest.fixture
def populated(admin):
    """Rows across two cultures and two scopes."""
    admin.create(TranslationRecord("Order.Status", "en-US", None, "Status"))
    admin.create(TranslationRecord("Order.Status", "fr-FR", None, "Statut"))
    admin.create(TranslationRecord("Order.Total", "en-US", None, "Total"))
    admin.create(TranslationRecord("Order.Status", "en-US", "T1", "State"))
    return admin


def as_tuples(records):
    return sorted((r.tenant_id or "", r.culture, r.key, r.value) for r in records)


@pytest.mark.unit
class TestNormalize:
    """Tests for TranslationAdminService.normalize()."""

    def test_trims_and_defaults(self, admin):
        """Test normalize trims the key and fills in the default culture and blank tenant."""
        record = admin.normalize("  Order.Status ", None, "   ", None)
        assert record == TranslationRecord("Order.Status", "en-US", None, "")

    def test_blank_key_or_culture_is_dropped(self, admin):
        """Test normalize returns None when the key or culture is blank."""
        assert admin.normalize("  ", "en-US", None, "x") is None
        assert admin.normalize("K", "  ", None, "x") is None

    def test_tenant_is_trimmed(self, admin):
        """Test normalize trims whitespace around the tenant id."""
        assert admin.normalize("K", "fr-FR", " T1 ", "x").tenant_id == "T1"


@pytest.mark.unit
class TestCrud:
    """Tests for list/get/create/update/delete."""

    def test_list_global_scope_ordered(self, populated):
        """Test list returns only global rows ordered by culture then key."""
        records = populated.list()
        assert [(r.culture, r.key) for r in records] == [
            ("en-US", "Order.Status"),
            ("en-US", "Order.Total"),
            ("fr-FR", "Order.Status"),
        ]

    def test_list_tenant_scope_only(self, populated):
        """Test list with a tenant returns that tenant's rows only."""
        records = populated.list(tenant_id="T1")
        assert [(r.key, r.value) for r in records] == [("Order.Status", "State")]

    def test_list_filters(self, populated):
        """Test list applies the culture and search filters together."""
        assert [r.value for r in populated.list(culture="fr-FR")] == ["Statut"]
        assert [r.key for r in populated.list(search="Tot")] == ["Order.Total"]
        assert [r.key for r in populated.list(search="Statu", culture="en-US")] == [
            "Order.Status"
        ]

    def test_create_and_get(self, admin):
        """Test create normalizes the record and get returns it with its id."""
        value_id = admin.create(TranslationRecord(" Greeting ", None, "", "Hello"))

        record = admin.get(value_id)

        assert record == TranslationRecord("Greeting", "en-US", None, "Hello")
        assert record.id == value_id

    def test_create_duplicate_raises(self, populated):
        """Test create raises DuplicateTranslationError for an existing row."""
        with pytest.raises(DuplicateTranslationError):
            populated.create(TranslationRecord("Order.Status", "en-US", None, "Again"))

    def test_create_without_key_raises(self, admin):
        """Test create rejects a record without a key."""
        with pytest.raises(ValueError):
            admin.create(TranslationRecord("", "en-US", None, "x"))

    def test_get_missing(self, admin):
        """Test get returns None for an unknown id."""
        assert admin.get(999) is None

    def test_update(self, populated):
        """Test update moves a row to a new key, culture and tenant."""
        value_id = populated.list(culture="fr-FR")[0].id

        updated = populated.update(
            value_id, TranslationRecord("Order.State", "fr-CA", "T2", "État")
        )

        assert updated == TranslationRecord("Order.State", "fr-CA", "T2", "État")
        assert populated.get(value_id).key == "Order.State"
        assert populated.list(culture="fr-FR") == []

    def test_update_missing_raises(self, admin):
        """Test update raises TranslationNotFoundError carrying the id."""
        with pytest.raises(TranslationNotFoundError) as exc_info:
            admin.update(42, TranslationRecord("K", "en-US", None, "v"))
        assert exc_info.value.value_id == 42

    def test_update_to_existing_row_raises(self, populated):
        """Test update onto an occupied (key, culture, tenant) raises."""
        value_id = populated.list(culture="fr-FR")[0].id
        with pytest.raises(DuplicateTranslationError):
            populated.update(value_id, TranslationRecord("Order.Total", "en-US", None, "x"))

    def test_delete(self, populated):
        """Test delete removes the row and reports success."""
        value_id = populated.list(culture="fr-FR")[0].id
        assert populated.delete(value_id) is True
        assert populated.get(value_id) is None

    def test_delete_missing_is_noop(self, admin):
        """Test delete of an unknown id returns False."""
        assert admin.delete(999) is False

    def test_delete_key_cascades(self, populated):
        """Test delete_key removes the key with its values in every scope."""
        assert populated.delete_key("Order.Status") is True

        assert [r.key for r in populated.list()] == ["Order.Total"]
        assert populated.list(tenant_id="T1") == []
        assert populated.delete_key("Order.Status") is False


@pytest.mark.unit
class TestImportExport:
    """Tests for CSV/JSON import, export and preview."""

    def test_csv_round_trip_with_special_characters(self, admin, store):
        """Test CSV export and import preserve commas, quotes and newlines."""
        rows = [
            TranslationRecord("Order.Note", "en-US", None, "Comma, separated"),
            TranslationRecord("Order.Quote", "en-US", None, 'Say "hello"'),
            TranslationRecord("Order.Lines", "fr-FR", None, "Ligne 1\nLigne 2\r\nLigne 3"),
        ]
        for record in rows:
            admin.create(record)

        exported = admin.export_csv()
        admin.delete_key("Order.Note")
        admin.delete_key("Order.Quote")
        admin.delete_key("Order.Lines")

        assert admin.import_csv(exported) == 3
        assert as_tuples(admin.list()) == as_tuples(rows)

    def test_json_round_trip(self, populated):
        """Test JSON export of a tenant scope imports back unchanged."""
        exported = populated.export_json(tenant_id="T1")
        populated.delete_key("Order.Status")

        assert populated.import_json(exported) == 1
        assert as_tuples(populated.list(tenant_id="T1")) == [
            ("T1", "en-US", "Order.Status", "State")
        ]

    def test_import_upserts(self, populated):
        """Test import updates existing rows and inserts new ones."""
        payload = (
            "Key,Culture,TenantId,Value\n"
            "Order.Status,fr-FR,,Statut modifié\n"
            "Order.Created,fr-FR,,Créée\n"
        )

        assert populated.import_csv(payload) == 2

        values = {r.key: r.value for r in populated.list(culture="fr-FR")}
        assert values == {"Order.Status": "Statut modifié", "Order.Created": "Créée"}

    def test_import_legacy_csv(self, admin):
        """Test import accepts the legacy TenantId,Culture,Key,Value column order."""
        payload = "TenantId,Culture,Key,Value\nT1,fr-FR,Order.Status,Statut\n"

        assert admin.import_csv(payload) == 1
        assert as_tuples(admin.list(tenant_id="T1")) == [("T1", "fr-FR", "Order.Status", "Statut")]

    def test_import_skips_rows_without_key(self, admin):
        """Test import skips rows whose key is blank."""
        payload = "Key,Culture,TenantId,Value\n ,en-US,,x\nA,en-US,,y\n"
        assert admin.import_csv(payload) == 1

    def test_import_json_defaults_culture(self, admin):
        """Test JSON import fills a missing culture with the default culture."""
        assert admin.import_json('[{"key": "Greeting", "value": "Hello"}]') == 1
        assert as_tuples(admin.list()) == [("", "en-US", "Greeting", "Hello")]

    def test_import_json_invalid_payload(self, admin):
        """Test JSON import raises InvalidImportError for a non-array payload."""
        with pytest.raises(InvalidImportError):
            admin.import_json('{"key": "Greeting"}')

    def test_import_empty_returns_zero(self, admin):
        """Test import of a header-only CSV changes nothing."""
        assert admin.import_csv("Key,Culture,TenantId,Value\n") == 0

    def test_preview_does_not_write(self, admin, store):
        """Test preview normalizes records without touching the store."""
        records = admin.preview_json(
            '[{"key": " A ", "culture": "fr-FR", "tenantId": " ", "value": null}, {"key": ""}]'
        )

        assert records == [TranslationRecord("A", "fr-FR", None, "")]
        with store.session() as session:
            assert session.count_values() == 0

    def test_preview_csv(self, admin):
        """Test preview_csv parses rows into records."""
        records = admin.preview_csv("Key,Culture,TenantId,Value\nA,fr-FR,T1,x\n")
        assert records == [TranslationRecord("A", "fr-FR", "T1", "x")]

    def test_import_creates_missing_keys(self, admin, store):
        """Test import creates the resource key for new rows."""
        admin.import_json('[{"key": "Greeting", "culture": "en-US", "value": "Hello"}]')
        with store.session() as session:
            assert session.ensure_key("Greeting") is False
