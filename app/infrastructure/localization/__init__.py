"""Database-backed string localization.

Translation lookup scoped by culture and tenant, descriptor-driven seeding
and synchronization, and an admin service for CRUD and bulk import/export.
"""

from infrastructure.localization.admin import TranslationAdminService
from infrastructure.localization.binding import apply_localization
from infrastructure.localization.exceptions import (
    DuplicateTranslationError,
    InvalidImportError,
    LocalizationConfigurationError,
    LocalizationError,
    TranslationNotFoundError,
)
from infrastructure.localization.factory import (
    create_admin_service,
    create_engine_for,
    create_localizer,
    create_seeder,
    create_store,
    create_sync,
)
from infrastructure.localization.loader import DescriptorLoader, YAMLDescriptorLoader
from infrastructure.localization.localizer import DatabaseStringLocalizer
from infrastructure.localization.models import (
    GLOBAL,
    LocalizableFieldDescriptor,
    LocalizedString,
    TenantScope,
    TranslationRecord,
    normalize_culture,
)
from infrastructure.localization.resolvers import (
    CultureChainResolver,
    RequestCultureResolver,
    make_culture_cookie,
    parse_culture_cookie,
)
from infrastructure.localization.seeder import LocalizationSeeder, default_value_for
from infrastructure.localization.service import LocalizationService
from infrastructure.localization.sql_store import SqlAlchemyLocalizationStore
from infrastructure.localization.store import LocalizationSession, LocalizationStore
from infrastructure.localization.sync import LocalizationSync

__all__ = [
    "CultureChainResolver",
    "DatabaseStringLocalizer",
    "DescriptorLoader",
    "DuplicateTranslationError",
    "GLOBAL",
    "InvalidImportError",
    "LocalizableFieldDescriptor",
    "LocalizationConfigurationError",
    "LocalizationError",
    "LocalizationSeeder",
    "LocalizationService",
    "LocalizationSession",
    "LocalizationStore",
    "LocalizationSync",
    "LocalizedString",
    "RequestCultureResolver",
    "SqlAlchemyLocalizationStore",
    "TenantScope",
    "TranslationAdminService",
    "TranslationNotFoundError",
    "TranslationRecord",
    "YAMLDescriptorLoader",
    "apply_localization",
    "create_admin_service",
    "create_engine_for",
    "create_localizer",
    "create_seeder",
    "create_store",
    "create_sync",
    "default_value_for",
    "make_culture_cookie",
    "normalize_culture",
    "parse_culture_cookie",
]
