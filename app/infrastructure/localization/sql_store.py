"""SQLAlchemy implementation of the localization store."""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from sqlalchemy import Engine, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from infrastructure.localization.exceptions import DuplicateTranslationError
from infrastructure.localization.models import (
    TenantScope,
    TranslationRecord,
    normalize_culture,
)
from infrastructure.localization.schema import Base, LocalizationKey, LocalizationValue
from infrastructure.localization.store import LocalizationSession, LocalizationStore
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def _tenant_qualifies(tenant: TenantScope):
    """Lookup filter: global scope sees global rows, a tenant sees its own and global rows."""
    if tenant.is_global:
        return LocalizationValue.tenant_id.is_(None)
    return or_(
        LocalizationValue.tenant_id == tenant.tenant_id,
        LocalizationValue.tenant_id.is_(None),
    )


def _tenant_exact(tenant: TenantScope):
    if tenant.is_global:
        return LocalizationValue.tenant_id.is_(None)
    return LocalizationValue.tenant_id == tenant.tenant_id


def _values_with_keys():
    return (
        select(LocalizationKey.key, LocalizationValue)
        .select_from(LocalizationValue)
        .join(LocalizationKey, LocalizationValue.localization_key_id == LocalizationKey.id)
    )


def _to_record(key: str, row: LocalizationValue) -> TranslationRecord:
    return TranslationRecord(
        key=key,
        culture=row.culture,
        tenant_id=row.tenant_id,
        value=row.value,
        id=row.id,
    )


class SqlAlchemyLocalizationSession(LocalizationSession):
    """Session-backed unit of work. Created by ``SqlAlchemyLocalizationStore.session``."""

    def __init__(self, session: Session):
        self._session = session

    def _value_rows(self, *criteria):
        return self._session.execute(_values_with_keys().where(*criteria)).all()

    def _get_key(self, key: str) -> Optional[LocalizationKey]:
        return self._session.scalars(
            select(LocalizationKey).where(LocalizationKey.key == key)
        ).one_or_none()

    def _get_row(
        self, key: str, culture: str, tenant: TenantScope
    ) -> Optional[LocalizationValue]:
        return self._session.scalars(
            select(LocalizationValue)
            .join(LocalizationValue.localization_key)
            .where(
                LocalizationKey.key == key,
                LocalizationValue.culture == normalize_culture(culture),
                _tenant_exact(tenant),
            )
        ).one_or_none()

    def find_values(
        self, key: str, cultures: Sequence[str], tenant: TenantScope
    ) -> List[TranslationRecord]:
        if not cultures:
            return []
        rows = self._value_rows(
            LocalizationKey.key == key,
            LocalizationValue.culture.in_([normalize_culture(c) for c in cultures]),
            _tenant_qualifies(tenant),
        )
        return [_to_record(k, v) for k, v in rows]

    def find_all_values(
        self, cultures: Sequence[str], tenant: TenantScope
    ) -> List[TranslationRecord]:
        if not cultures:
            return []
        rows = self._value_rows(
            LocalizationValue.culture.in_([normalize_culture(c) for c in cultures]),
            _tenant_qualifies(tenant),
        )
        return [_to_record(k, v) for k, v in rows]

    def ensure_key(
        self, key: str, description: Optional[str] = None, is_system: bool = True
    ) -> bool:
        if self._get_key(key) is not None:
            return False
        try:
            with self._session.begin_nested():
                self._session.add(
                    LocalizationKey(key=key, description=description, is_system=is_system)
                )
        except IntegrityError:
            # Another writer inserted the key between our read and insert
            logger.info("localization_key_insert_race", key=key)
            return False
        return True

    def get_value(
        self, key: str, culture: str, tenant: TenantScope
    ) -> Optional[TranslationRecord]:
        row = self._get_row(key, culture, tenant)
        return _to_record(key, row) if row is not None else None

    def add_value(
        self, key: str, culture: str, tenant: TenantScope, value: str
    ) -> bool:
        key_row = self._get_key(key)
        if key_row is None:
            raise KeyError(f"Localization key {key!r} does not exist")
        if self._get_row(key, culture, tenant) is not None:
            return False
        try:
            with self._session.begin_nested():
                self._session.add(
                    LocalizationValue(
                        localization_key_id=key_row.id,
                        culture=normalize_culture(culture),
                        tenant_id=tenant.tenant_id,
                        value=value,
                    )
                )
        except IntegrityError:
            logger.info(
                "localization_value_insert_race",
                key=key,
                culture=culture,
                tenant=str(tenant),
            )
            return False
        return True

    def set_value(self, key: str, culture: str, tenant: TenantScope, value: str) -> bool:
        row = self._get_row(key, culture, tenant)
        if row is None:
            return False
        row.value = value
        self._session.flush()
        return True

    def list_values(
        self,
        tenant: TenantScope,
        culture: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[TranslationRecord]:
        criteria = [_tenant_exact(tenant)]
        if culture:
            criteria.append(LocalizationValue.culture == normalize_culture(culture))
        if search:
            pattern = f"%{search}%"
            criteria.append(
                or_(
                    LocalizationKey.key.like(pattern),
                    LocalizationValue.value.like(pattern),
                )
            )
        stmt = (
            _values_with_keys()
            .where(*criteria)
            .order_by(LocalizationValue.culture, LocalizationKey.key)
        )
        return [_to_record(k, v) for k, v in self._session.execute(stmt).all()]

    def get_value_by_id(self, value_id: int) -> Optional[TranslationRecord]:
        row = self._session.get(LocalizationValue, value_id)
        if row is None:
            return None
        return _to_record(row.localization_key.key, row)

    def update_value_by_id(self, value_id: int, record: TranslationRecord) -> bool:
        row = self._session.get(LocalizationValue, value_id)
        if row is None:
            return False

        conflict = self._get_row(record.key, record.culture, record.tenant)
        if conflict is not None and conflict.id != row.id:
            raise DuplicateTranslationError(
                f"Translation {record.key!r} already exists for "
                f"{record.culture} ({record.tenant})"
            )

        if row.localization_key.key != record.key:
            self.ensure_key(record.key, is_system=False)
            row.localization_key = self._get_key(record.key)
        row.culture = normalize_culture(record.culture)
        row.tenant_id = record.tenant_id
        row.value = record.value
        try:
            with self._session.begin_nested():
                self._session.flush()
        except IntegrityError as e:
            raise DuplicateTranslationError(
                f"Translation {record.key!r} already exists for "
                f"{record.culture} ({record.tenant})"
            ) from e
        return True

    def delete_value(self, value_id: int) -> bool:
        row = self._session.get(LocalizationValue, value_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def delete_key(self, key: str) -> bool:
        key_row = self._get_key(key)
        if key_row is None:
            return False
        self._session.delete(key_row)
        self._session.flush()
        return True

    def count_values(self) -> int:
        return self._session.scalar(select(func.count(LocalizationValue.id))) or 0


class SqlAlchemyLocalizationStore(LocalizationStore):
    """Localization store backed by a relational database through SQLAlchemy.

    Attributes:
        engine: SQLAlchemy engine for the localization database.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        logger.info(
            "initialized_sql_localization_store",
            dialect=engine.dialect.name,
        )

    @contextmanager
    def session(self) -> Iterator[LocalizationSession]:
        with self._session_factory() as session, session.begin():
            yield SqlAlchemyLocalizationSession(session)

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)
        logger.info("localization_schema_ensured", dialect=self.engine.dialect.name)
