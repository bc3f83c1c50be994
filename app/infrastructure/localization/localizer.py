"""Database-backed string localizer.

Resolves translations from the localization store with culture fallback and
tenant precedence:

- Cultures are tried in chain order ("fr-CA", then "fr"); within a single
  culture a tenant-specific row beats the global row.
- When fallback is enabled and the chain does not contain the default
  culture, the default culture is tried last.
- A miss returns the key itself with ``resource_not_found`` set; lookups
  never raise for missing keys.
"""

import string
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from infrastructure.localization.models import (
    LocalizedString,
    TenantScope,
    TranslationRecord,
    normalize_culture,
)
from infrastructure.localization.resolvers import CultureChainResolver
from infrastructure.localization.store import LocalizationSession, LocalizationStore
from infrastructure.logging import get_module_logger

logger = get_module_logger()

_FORMATTER = string.Formatter()


def _has_only_positional_fields(template: str) -> bool:
    """True when every replacement field is a bare index such as "{0}" or "{1:N2}"."""
    for _, field_name, _, _ in _FORMATTER.parse(template):
        if field_name is not None and not field_name.isdigit():
            return False
    return True


def _tenant_first(record: TranslationRecord) -> int:
    return 0 if record.tenant_id is not None else 1


class DatabaseStringLocalizer:
    """Looks up localized strings for one culture and tenant scope.

    Instances are cheap and immutable; use ``with_culture``/``with_tenant`` to
    derive localizers for another scope. Every lookup opens its own store
    session.

    Attributes:
        store: LocalizationStore holding keys and values.
        culture: Culture requested by this localizer.
        tenant: Tenant scope of lookups.
        default_culture: Culture tried after the parent chain is exhausted.
        enable_culture_fallback: Walk parent cultures and the default culture.
        resource_name: Name of the resource the localizer was created for.
    """

    def __init__(
        self,
        store: LocalizationStore,
        culture: str,
        tenant: Union[TenantScope, str, None] = None,
        default_culture: str = "en-US",
        enable_culture_fallback: bool = True,
        resource_name: str = "",
        chain_resolver: Optional[CultureChainResolver] = None,
    ):
        self.store = store
        self.culture = normalize_culture(culture) or normalize_culture(default_culture)
        self.tenant = tenant if isinstance(tenant, TenantScope) else TenantScope.from_value(tenant)
        self.default_culture = normalize_culture(default_culture)
        self.enable_culture_fallback = enable_culture_fallback
        self.resource_name = resource_name
        self.chain_resolver = chain_resolver or CultureChainResolver()
        self.log = logger.bind(
            resource=resource_name,
            culture=self.culture,
            tenant=str(self.tenant),
        )

    def __getitem__(self, name: str) -> LocalizedString:
        return self.resolve(name)

    def resolve(self, name: str, *arguments: Any) -> LocalizedString:
        """Resolve a localized string, formatting it with positional arguments.

        Arguments are substituted with ``str.format`` ("{0}", "{1}", ...) only
        when a translation is found. A template with any other kind of field
        ("{name}", "{0.attr}", "{0[1]}") or that cannot be formatted with the
        given arguments is returned unformatted.

        Args:
            name: Resource key to resolve.
            *arguments: Optional positional format arguments.

        Returns:
            LocalizedString with the resolved text, or the key and
            ``resource_not_found=True`` on a miss.
        """
        cultures = self.chain_resolver.chain(self.culture, self.enable_culture_fallback)

        with self.store.session() as session:
            value = self._lookup(session, name, cultures)

            if (
                value is None
                and self.enable_culture_fallback
                and self.default_culture not in cultures
            ):
                value = self._lookup(session, name, [self.default_culture])
                if value is not None:
                    self.log.debug(
                        "used_default_culture_translation",
                        key=name,
                        default_culture=self.default_culture,
                    )

        if value is None:
            self.log.debug("translation_not_found", key=name, cultures=cultures)
            return LocalizedString(name, name, resource_not_found=True)

        return LocalizedString(name, self._format(name, value, arguments))

    def _lookup(
        self, session: LocalizationSession, name: str, cultures: Sequence[str]
    ) -> Optional[str]:
        """Return the first value in culture order, tenant rows before global rows."""
        rows = session.find_values(name, cultures, self.tenant)
        for culture in cultures:
            candidates = [r for r in rows if r.culture.lower() == culture.lower()]
            if candidates:
                return min(candidates, key=_tenant_first).value
        return None

    def _format(self, name: str, template: str, arguments: Sequence[Any]) -> str:
        if not arguments:
            return template
        try:
            if not _has_only_positional_fields(template):
                raise ValueError("only positional fields such as {0} are supported")
            return template.format(*arguments)
        except (IndexError, KeyError, TypeError, ValueError) as e:
            self.log.warning(
                "translation_format_failed",
                key=name,
                error=str(e),
                argument_count=len(arguments),
            )
            return template

    def all_strings(self, include_parent_cultures: bool = True) -> Dict[str, str]:
        """Resolve every key visible to this culture and tenant at once.

        For each key the winning row is chosen by tenant precedence first, then
        by the nearest culture in the chain.

        Args:
            include_parent_cultures: Include parent cultures in the chain.

        Returns:
            Mapping of key to resolved value.
        """
        cultures = self.chain_resolver.chain(self.culture, include_parent_cultures)

        with self.store.session() as session:
            rows = session.find_all_values(cultures, self.tenant)

        rank = {culture.lower(): i for i, culture in enumerate(cultures)}
        best: Dict[str, TranslationRecord] = {}
        for row in rows:
            if row.culture.lower() not in rank:
                continue
            current = best.get(row.key)
            if current is None or self._precedence(row, rank) < self._precedence(current, rank):
                best[row.key] = row

        return {key: row.value for key, row in best.items()}

    @staticmethod
    def _precedence(row: TranslationRecord, rank: Dict[str, int]) -> Tuple[int, int]:
        return (_tenant_first(row), rank[row.culture.lower()])

    def get_all_strings(self, include_parent_cultures: bool = True) -> List[LocalizedString]:
        """Same as ``all_strings`` but as LocalizedString objects ordered by key."""
        return [
            LocalizedString(key, value)
            for key, value in sorted(self.all_strings(include_parent_cultures).items())
        ]

    def with_culture(self, culture: str) -> "DatabaseStringLocalizer":
        """Return a localizer for another culture with the same tenant."""
        return DatabaseStringLocalizer(
            store=self.store,
            culture=culture,
            tenant=self.tenant,
            default_culture=self.default_culture,
            enable_culture_fallback=self.enable_culture_fallback,
            resource_name=self.resource_name,
            chain_resolver=self.chain_resolver,
        )

    def with_tenant(self, tenant_id: Optional[str]) -> "DatabaseStringLocalizer":
        """Return a localizer for another tenant (blank or None means global)."""
        return DatabaseStringLocalizer(
            store=self.store,
            culture=self.culture,
            tenant=TenantScope.from_value(tenant_id),
            default_culture=self.default_culture,
            enable_culture_fallback=self.enable_culture_fallback,
            resource_name=self.resource_name,
            chain_resolver=self.chain_resolver,
        )
