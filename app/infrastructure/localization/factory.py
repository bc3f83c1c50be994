"""Factory functions for creating localization components.

Wires the configured database provider to a SQLAlchemy engine and builds
the store, localizers and services on top of it. Invalid provider settings
fail fast with ``LocalizationConfigurationError``.
"""

from typing import Dict, Optional, Tuple

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.pool import StaticPool

from infrastructure.configuration import DatabaseSettings, LocalizationSettings
from infrastructure.localization.admin import TranslationAdminService
from infrastructure.localization.exceptions import LocalizationConfigurationError
from infrastructure.localization.localizer import DatabaseStringLocalizer
from infrastructure.localization.seeder import LocalizationSeeder
from infrastructure.localization.sql_store import SqlAlchemyLocalizationStore
from infrastructure.localization.store import LocalizationStore
from infrastructure.localization.sync import LocalizationSync
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# Provider name -> accepted SQLAlchemy backend names
PROVIDER_BACKENDS: Dict[str, Tuple[str, ...]] = {
    "sqlite": ("sqlite",),
    "postgresql": ("postgresql",),
    "mysql": ("mysql", "mariadb"),
    "sqlserver": ("mssql",),
}

PROVIDER_ALIASES: Dict[str, str] = {
    "postgres": "postgresql",
    "npgsql": "postgresql",
    "mariadb": "mysql",
    "mssql": "sqlserver",
    "localdb": "sqlserver",
}


def resolve_provider(provider: Optional[str]) -> str:
    """Map a configured provider name (or alias) to its canonical name.

    Raises:
        LocalizationConfigurationError: If the provider is unknown.
    """
    name = (provider or "").strip().lower()
    name = PROVIDER_ALIASES.get(name, name)
    if name not in PROVIDER_BACKENDS:
        raise LocalizationConfigurationError(
            f"Unknown localization database provider {provider!r}; "
            f"expected one of {sorted(PROVIDER_BACKENDS)}"
        )
    return name


def _enable_sqlite_savepoints(engine: Engine) -> None:
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINTs work on pysqlite."""

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_engine_for(database_settings: DatabaseSettings) -> Engine:
    """Create the SQLAlchemy engine for the configured provider.

    Args:
        database_settings: Provider, URL and echo settings.

    Returns:
        Engine bound to the localization database.

    Raises:
        LocalizationConfigurationError: If the provider is unknown, the URL is
            missing or malformed, or the URL does not match the provider.
    """
    provider = resolve_provider(database_settings.provider)

    if not database_settings.url or not database_settings.url.strip():
        raise LocalizationConfigurationError(
            "LOCALIZATION_DB_URL must be set for the localization store"
        )

    try:
        url = make_url(database_settings.url.strip())
    except ArgumentError as e:
        raise LocalizationConfigurationError(f"Invalid LOCALIZATION_DB_URL: {e}") from e

    if url.get_backend_name() not in PROVIDER_BACKENDS[provider]:
        raise LocalizationConfigurationError(
            f"LOCALIZATION_DB_URL backend {url.get_backend_name()!r} "
            f"does not match provider {provider!r}"
        )

    kwargs = {"echo": database_settings.echo}
    if provider == "sqlite" and url.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_engine(url, **kwargs)
    if provider == "sqlite":
        _enable_sqlite_savepoints(engine)

    logger.info(
        "localization_engine_created",
        provider=provider,
        url=url.render_as_string(hide_password=True),
    )
    return engine


def create_store(
    database_settings: DatabaseSettings,
    create_schema: bool = False,
) -> SqlAlchemyLocalizationStore:
    """Create a SQLAlchemy-backed localization store.

    Args:
        database_settings: Database settings for the engine.
        create_schema: Create missing tables and indexes immediately.
    """
    store = SqlAlchemyLocalizationStore(create_engine_for(database_settings))
    if create_schema:
        store.create_schema()
    return store


def create_localizer(
    store: LocalizationStore,
    localization_settings: LocalizationSettings,
    culture: Optional[str] = None,
    tenant_id: Optional[str] = None,
    resource_name: str = "",
) -> DatabaseStringLocalizer:
    """Create a localizer for a culture and tenant.

    Args:
        store: Store to resolve from.
        localization_settings: Default culture, fallback and tenant settings.
        culture: Requested culture (default: the configured default culture).
        tenant_id: Tenant scope (default: the configured tenant, else global).
        resource_name: Name of the resource the localizer serves.

    Usage:
        localizer = create_localizer(store, settings.localization, culture="fr-CA")
        localizer["Order.Status"].value
    """
    return DatabaseStringLocalizer(
        store=store,
        culture=culture or localization_settings.default_culture,
        tenant=tenant_id if tenant_id is not None else localization_settings.tenant_id,
        default_culture=localization_settings.default_culture,
        enable_culture_fallback=localization_settings.enable_culture_fallback,
        resource_name=resource_name,
    )


def create_seeder(
    store: LocalizationStore, localization_settings: LocalizationSettings
) -> LocalizationSeeder:
    return LocalizationSeeder(store, key_prefix=localization_settings.key_prefix)


def create_sync(
    store: LocalizationStore, localization_settings: LocalizationSettings
) -> LocalizationSync:
    return LocalizationSync(store, key_prefix=localization_settings.key_prefix)


def create_admin_service(
    store: LocalizationStore, localization_settings: LocalizationSettings
) -> TranslationAdminService:
    return TranslationAdminService(
        store, default_culture=localization_settings.default_culture
    )
