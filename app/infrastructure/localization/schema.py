"""SQLAlchemy mappings for the localization tables.

Table layout:
- localization_keys: id, key (unique), description, is_system
- localization_values: id, localization_key_id (FK, cascade), culture,
  tenant_id (NULL = global), value

Uniqueness of values is split by tenant scope so a tenant can override a
global value for the same key and culture:
- (localization_key_id, culture) unique WHERE tenant_id IS NULL
- (tenant_id, localization_key_id, culture) unique WHERE tenant_id IS NOT NULL

MySQL has no filtered indexes; there the global rule is only enforced by
the application (NULL tenant ids never collide in the tenant index).
"""

from typing import List, Optional

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class LocalizationKey(Base):
    __tablename__ = "localization_keys"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    is_system: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    values: Mapped[List["LocalizationValue"]] = relationship(
        back_populates="localization_key",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<LocalizationKey {self.key}>"


class LocalizationValue(Base):
    __tablename__ = "localization_values"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    localization_key_id: Mapped[int] = mapped_column(
        ForeignKey("localization_keys.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    culture: Mapped[str] = mapped_column(String(32), nullable=False)
    tenant_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")

    localization_key: Mapped[LocalizationKey] = relationship(back_populates="values")

    __table_args__ = (
        Index(
            "ux_localization_values_global",
            "localization_key_id",
            "culture",
            unique=True,
            sqlite_where=text("tenant_id IS NULL"),
            postgresql_where=text("tenant_id IS NULL"),
            mssql_where=text("tenant_id IS NULL"),
        ).ddl_if(dialect=("sqlite", "postgresql", "mssql")),
        Index(
            "ux_localization_values_tenant",
            "tenant_id",
            "localization_key_id",
            "culture",
            unique=True,
            sqlite_where=text("tenant_id IS NOT NULL"),
            postgresql_where=text("tenant_id IS NOT NULL"),
            mssql_where=text("tenant_id IS NOT NULL"),
        ),
    )

    def __repr__(self) -> str:
        scope = self.tenant_id or "global"
        return f"<LocalizationValue {self.localization_key_id}/{self.culture}/{scope}>"
