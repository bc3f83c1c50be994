"""Tests for infrastructure.localization.localizer module."""

from contextlib import contextmanager
from unittest.mock import MagicMock

import pytest

from infrastructure.localization import (
    DatabaseStringLocalizer,
    LocalizedString,
    TranslationRecord,
)


def make_localizer(store, culture, tenant=None, default_culture="en-US", fallback=True):
    return DatabaseStringLocalizer(
        store=store,
        culture=culture,
        tenant=tenant,
        default_culture=default_culture,
        enable_culture_fallback=fallback,
    )


@pytest.mark.unit
class TestResolveTenantPrecedence:
    """Tenant-specific values beat global values within one culture."""

    @pytest.fixture(autouse=True)
    def _translations(self, add_translation):
        add_translation("Order.Status", "en-US", "Status")
        add_translation("Order.Status", "en-US", "State", tenant_id="T1")

    def test_tenant_value_wins_for_that_tenant(self, store):
        """Test the tenant's own value is returned for that tenant."""
        assert make_localizer(store, "en-US", "T1")["Order.Status"].value == "State"

    def test_other_tenant_gets_global_value(self, store):
        """Test another tenant falls back to the global value."""
        assert make_localizer(store, "en-US", "T2")["Order.Status"].value == "Status"

    def test_no_tenant_gets_global_value(self, store):
        """Test a localizer without a tenant returns the global value."""
        assert make_localizer(store, "en-US")["Order.Status"].value == "Status"

    def test_global_value_visible_to_tenant(self, store, add_translation):
        """A tenant sees global values when it has no override."""
        add_translation("Order.Total", "en-US", "Total")

        localized = make_localizer(store, "en-US", "T1")["Order.Total"]

        assert localized.value == "Total"
        assert localized.found


@pytest.mark.unit
class TestResolveCultureFallback:
    """Culture chain order and default-culture fallback."""

    def test_parent_culture_used_when_specific_missing(self, store, add_translation):
        """Test fr-CA falls back to a fr value."""
        add_translation("Greeting", "fr", "Bonjour")
        assert make_localizer(store, "fr-CA")["Greeting"].value == "Bonjour"

    def test_specific_culture_beats_parent(self, store, add_translation):
        """Test a fr-CA value wins over the fr value."""
        add_translation("Greeting", "fr", "Bonjour")
        add_translation("Greeting", "fr-CA", "Allo")
        assert make_localizer(store, "fr-CA")["Greeting"].value == "Allo"

    def test_nearer_culture_beats_tenant_on_parent(self, store, add_translation):
        """The culture chain is the outer loop: a global fr-CA row beats a tenant fr row."""
        add_translation("Greeting", "fr-CA", "Allo")
        add_translation("Greeting", "fr", "Salut", tenant_id="T1")
        assert make_localizer(store, "fr-CA", "T1")["Greeting"].value == "Allo"

    def test_default_culture_tried_after_chain(self, store, add_translation):
        """Test the default culture is tried after the parent chain."""
        add_translation("Greeting", "en-US", "Hello")
        assert make_localizer(store, "fr-CA")["Greeting"].value == "Hello"

    def test_sibling_culture_not_used_unless_default(self, store, add_translation):
        """A fr-FR value is not reachable from fr-CA unless fr-FR is the default culture."""
        add_translation("Greeting", "fr-FR", "Bonjour")

        assert not make_localizer(store, "fr-CA")["Greeting"].found

        localized = make_localizer(store, "fr-CA", default_culture="fr-FR")["Greeting"]
        assert localized.found
        assert localized.value == "Bonjour"

    def test_fallback_disabled_only_exact_culture(self, store, add_translation):
        """Test disabling fallback only consults the exact culture."""
        add_translation("Greeting", "fr", "Bonjour")
        add_translation("Greeting", "en-US", "Hello")

        localized = make_localizer(store, "fr-CA", fallback=False)["Greeting"]

        assert not localized.found


@pytest.mark.unit
class TestResolveMissingAndFormatting:
    """Missing keys and argument formatting."""

    def test_missing_key_returns_key_not_found(self, store):
        """Test a missing key resolves to itself flagged as not found."""
        localized = make_localizer(store, "en-US")["Does.Not.Exist"]
        assert localized == LocalizedString("Does.Not.Exist", "Does.Not.Exist", True)
        assert localized.value != ""

    def test_empty_value_is_found(self, store, add_translation):
        """Test an empty stored value counts as found."""
        add_translation("Blank", "en-US", "")
        localized = make_localizer(store, "en-US")["Blank"]
        assert localized.found
        assert localized.value == ""

    def test_format_arguments(self, store, add_translation):
        """Test positional arguments are substituted into the value."""
        add_translation("Order.Count", "en-US", "{0} orders for {1}")
        localized = make_localizer(store, "en-US").resolve("Order.Count", 3, "Alice")
        assert localized.value == "3 orders for Alice"

    def test_format_error_returns_template(self, store, add_translation):
        """Test too few arguments returns the unformatted template."""
        add_translation("Order.Count", "en-US", "{0} orders for {1}")
        localized = make_localizer(store, "en-US").resolve("Order.Count", 3)
        assert localized.value == "{0} orders for {1}"
        assert localized.found

    def test_missing_key_is_not_formatted(self, store):
        """Test the key is returned unformatted when not found."""
        localized = make_localizer(store, "en-US").resolve("Missing {0}", "x")
        assert localized.value == "Missing {0}"

    @pytest.mark.parametrize(
        "template, argument",
        [
            ("Hello {0.name}", "Bob"),
            ("Items {0[1]}", 5),
            ("Hello {name}", "Bob"),
            ("Hello {}", "Bob"),
            ("Total {0:d}", "five"),
            ("Broken {0", "x"),
        ],
    )
    def test_non_positional_template_returned_unformatted(
        self, store, add_translation, template, argument
    ):
        """Only bare {N} fields are substituted; anything else never raises."""
        add_translation("Greeting", "en-US", template)

        localized = make_localizer(store, "en-US").resolve("Greeting", argument)

        assert localized.value == template
        assert localized.found

    def test_format_spec_on_positional_field(self, store, add_translation):
        """Format specs on indexed fields are applied."""
        add_translation("Order.Total", "en-US", "Total {0:.2f}")
        localized = make_localizer(store, "en-US").resolve("Order.Total", 3.5)
        assert localized.value == "Total 3.50"


@pytest.mark.unit
class TestAllStrings:
    """Tests for all_strings() and related helpers."""

    @pytest.fixture(autouse=True)
    def _translations(self, add_translation):
        add_translation("A", "fr", "A-fr")
        add_translation("A", "fr-CA", "A-fr-CA")
        add_translation("B", "fr", "B-fr")
        add_translation("B", "fr", "B-fr-T1", tenant_id="T1")
        add_translation("C", "en-US", "C-en")

    def test_nearest_culture_per_key(self, store):
        """Test each key takes its nearest culture in the chain."""
        strings = make_localizer(store, "fr-CA").all_strings()
        assert strings == {"A": "A-fr-CA", "B": "B-fr"}

    def test_tenant_precedence(self, store):
        """Test tenant rows win in all_strings."""
        strings = make_localizer(store, "fr-CA", "T1").all_strings()
        assert strings["B"] == "B-fr-T1"

    def test_without_parent_cultures(self, store):
        """Test include_parent_cultures=False only reads the exact culture."""
        assert make_localizer(store, "fr-CA").all_strings(False) == {"A": "A-fr-CA"}

    def test_get_all_strings_sorted(self, store):
        """Test get_all_strings returns LocalizedString items sorted by name."""
        names = [s.name for s in make_localizer(store, "fr-CA").get_all_strings()]
        assert names == ["A", "B"]


@pytest.mark.unit
class TestScopedLocalizers:
    """Tests for with_culture() and with_tenant()."""

    def test_with_culture(self, store, add_translation):
        """Test with_culture returns a localizer bound to the new culture."""
        add_translation("Greeting", "fr-FR", "Bonjour")
        localizer = make_localizer(store, "en-US").with_culture("fr-FR")
        assert localizer.culture == "fr-FR"
        assert localizer["Greeting"].value == "Bonjour"

    def test_with_tenant(self, store, add_translation):
        """Test with_tenant binds a tenant and a blank tenant means global."""
        add_translation("Greeting", "en-US", "Hello")
        add_translation("Greeting", "en-US", "Howdy", tenant_id="T1")
        localizer = make_localizer(store, "en-US").with_tenant("T1")
        assert localizer["Greeting"].value == "Howdy"
        assert localizer.with_tenant("  ").tenant.is_global

    def test_blank_culture_uses_default(self, store):
        """Test a blank culture becomes the default culture."""
        assert make_localizer(store, "").culture == "en-US"


class _RowsStore:
    """Store stub returning fixed rows, as a case-insensitive collation would."""

    def __init__(self, rows):
        self.rows = rows

    @contextmanager
    def session(self):
        session = MagicMock()
        session.find_values.return_value = self.rows
        session.find_all_values.return_value = self.rows
        yield session


@pytest.mark.unit
class TestCultureCasing:
    """Rows whose culture casing differs from the chain still resolve."""

    @pytest.fixture
    def store_with_lowercase_rows(self):
        return _RowsStore(
            [
                TranslationRecord("Greeting", "fr-ca", None, "Allo", id=1),
                TranslationRecord("Greeting", "FR", None, "Bonjour", id=2),
                TranslationRecord("Farewell", "fr", None, "Au revoir", id=3),
            ]
        )

    def test_resolve_matches_case_insensitively(self, store_with_lowercase_rows):
        """A stored fr-ca row answers a fr-CA request."""
        assert make_localizer(store_with_lowercase_rows, "fr-CA")["Greeting"].value == "Allo"

    def test_all_strings_matches_case_insensitively(self, store_with_lowercase_rows):
        """all_strings ranks differently cased rows by the culture chain."""
        strings = make_localizer(store_with_lowercase_rows, "fr-CA").all_strings()
        assert strings == {"Greeting": "Allo", "Farewell": "Au revoir"}

    def test_all_strings_ignores_rows_outside_chain(self):
        """Rows for cultures outside the chain are skipped."""
        store = _RowsStore([TranslationRecord("Greeting", "de-DE", None, "Hallo", id=1)])
        assert make_localizer(store, "fr-CA").all_strings() == {}
