"""Localization service for dependency injection.

Provides a class-based interface to the localization system for easier DI
and testing.
"""

from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

from infrastructure.configuration import Settings
from infrastructure.localization.admin import TranslationAdminService
from infrastructure.localization.binding import apply_localization
from infrastructure.localization.factory import (
    create_admin_service,
    create_localizer,
    create_seeder,
    create_store,
    create_sync,
)
from infrastructure.localization.loader import YAMLDescriptorLoader
from infrastructure.localization.localizer import DatabaseStringLocalizer
from infrastructure.localization.models import LocalizableFieldDescriptor, LocalizedString
from infrastructure.localization.resolvers import RequestCultureResolver
from infrastructure.localization.store import LocalizationStore
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class LocalizationService:
    """Class-based localization service.

    Thin facade over the store, localizers, seeder, sync component and admin
    service, all configured from one ``Settings`` instance.

    Usage:
        # Via dependency injection
        from infrastructure.services import LocalizationServiceDep

        @router.get("/label")
        def get_label(localization: LocalizationServiceDep):
            return {"label": localization.resolve("Order.Status", culture="fr-CA").value}

        # Direct instantiation
        service = LocalizationService(settings)
        service.initialize()
    """

    def __init__(self, settings: Settings, store: Optional[LocalizationStore] = None):
        """Initialize the localization service.

        Args:
            settings: Application settings.
            store: Optional pre-built store. If not provided, one is created
                from the database settings.
        """
        self.settings = settings
        self.store = store or create_store(settings.database)
        self.culture_resolver = RequestCultureResolver(
            default_culture=settings.localization.default_culture,
            supported_cultures=settings.localization.supported_cultures,
        )
        self._admin = create_admin_service(self.store, settings.localization)
        self._seeder = create_seeder(self.store, settings.localization)
        self._sync = create_sync(self.store, settings.localization)

    @property
    def admin(self) -> TranslationAdminService:
        return self._admin

    def initialize(self) -> int:
        """Create the schema and seed descriptors from the configured directory.

        Returns:
            Number of value rows seeded.
        """
        self.store.create_schema()

        descriptors_dir = self.settings.localization.descriptors_dir
        if not descriptors_dir:
            return 0

        descriptors = YAMLDescriptorLoader(Path(descriptors_dir)).load()
        return self.seed(descriptors)

    def localizer(
        self,
        culture: Optional[str] = None,
        tenant_id: Optional[str] = None,
        resource_name: str = "",
    ) -> DatabaseStringLocalizer:
        """Create a localizer; culture and tenant default to the configured ones."""
        return create_localizer(
            self.store,
            self.settings.localization,
            culture=culture,
            tenant_id=tenant_id,
            resource_name=resource_name,
        )

    def resolve(
        self,
        key: str,
        *arguments: Any,
        culture: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> LocalizedString:
        """Resolve one key for a culture and tenant."""
        return self.localizer(culture, tenant_id).resolve(key, *arguments)

    def all_strings(
        self,
        culture: Optional[str] = None,
        tenant_id: Optional[str] = None,
        include_parent_cultures: bool = True,
    ) -> dict[str, str]:
        return self.localizer(culture, tenant_id).all_strings(include_parent_cultures)

    def resolve_request_culture(
        self,
        cookie_value: Optional[str] = None,
        query_culture: Optional[str] = None,
        accept_language: Optional[str] = None,
    ) -> str:
        """Pick the request culture: cookie, query string, header, default."""
        return self.culture_resolver.resolve(cookie_value, query_culture, accept_language)

    def seed(
        self,
        descriptors: Iterable[LocalizableFieldDescriptor],
        cultures: Optional[Sequence[str]] = None,
        tenant_id: Optional[str] = None,
        overwrite: bool = False,
    ) -> int:
        """Seed descriptor keys; cultures default to the supported cultures."""
        if cultures is None:
            cultures = self.settings.localization.supported_cultures or [
                self.settings.localization.default_culture
            ]
        return self._seeder.seed(descriptors, cultures, tenant_id=tenant_id, overwrite=overwrite)

    def sync(
        self,
        entity: Any,
        descriptors: Iterable[LocalizableFieldDescriptor],
        culture: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> int:
        """Upsert an entity's localized fields after it is saved."""
        return self._sync.sync(
            entity,
            descriptors,
            culture or self.settings.localization.default_culture,
            tenant_id if tenant_id is not None else self.settings.localization.tenant_id,
        )

    def apply(
        self,
        model: Any,
        descriptors: Iterable[LocalizableFieldDescriptor],
        culture: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> Any:
        """Replace the described fields of ``model`` with localized values."""
        return apply_localization(model, descriptors, self.localizer(culture, tenant_id))

    def supported_cultures(self) -> List[str]:
        return list(self.settings.localization.supported_cultures)
