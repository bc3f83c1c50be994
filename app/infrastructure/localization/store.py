"""Localization store abstract base classes.

The store persists ``LocalizationKey`` rows and the ``LocalizationValue``
rows they own. Callers open one session per operation (a resolve, a seed
run, an import) and the session commits or rolls back as a unit.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import List, Optional, Sequence

from infrastructure.localization.models import TenantScope, TranslationRecord


class LocalizationSession(ABC):
    """Unit of work against the localization store.

    Tenant qualification for lookups (``find_values``/``find_all_values``):
    a global scope matches only global rows; a tenant scope matches both the
    tenant's rows and global rows. Exact-scope operations (``get_value``,
    ``add_value``, ``list_values``) match only the given scope.
    """

    @abstractmethod
    def find_values(
        self, key: str, cultures: Sequence[str], tenant: TenantScope
    ) -> List[TranslationRecord]:
        """Return the qualifying rows of one key for the given cultures.

        Args:
            key: Resource key.
            cultures: Cultures to match.
            tenant: Requesting tenant scope.

        Returns:
            Matching records in no particular order.
        """
        pass

    @abstractmethod
    def find_all_values(
        self, cultures: Sequence[str], tenant: TenantScope
    ) -> List[TranslationRecord]:
        """Return every qualifying row whose culture is in ``cultures``."""
        pass

    @abstractmethod
    def ensure_key(
        self, key: str, description: Optional[str] = None, is_system: bool = True
    ) -> bool:
        """Make sure a ``LocalizationKey`` exists.

        A concurrent insert of the same key is treated as already present.

        Returns:
            True if the key was created by this call, False if it existed.
        """
        pass

    @abstractmethod
    def get_value(
        self, key: str, culture: str, tenant: TenantScope
    ) -> Optional[TranslationRecord]:
        """Return the row stored for exactly (key, culture, tenant), if any."""
        pass

    @abstractmethod
    def add_value(
        self, key: str, culture: str, tenant: TenantScope, value: str
    ) -> bool:
        """Insert a value row; the key must already exist.

        Returns:
            True if inserted, False if the row already existed (including
            when a concurrent writer inserted it first).
        """
        pass

    @abstractmethod
    def set_value(self, key: str, culture: str, tenant: TenantScope, value: str) -> bool:
        """Update the text of an existing row.

        Returns:
            True if a row was updated, False if none exists.
        """
        pass

    @abstractmethod
    def list_values(
        self,
        tenant: TenantScope,
        culture: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[TranslationRecord]:
        """List rows of exactly one tenant scope, ordered by culture then key.

        Args:
            tenant: Scope to list.
            culture: Optional culture filter.
            search: Optional substring matched against key or value.
        """
        pass

    @abstractmethod
    def get_value_by_id(self, value_id: int) -> Optional[TranslationRecord]:
        pass

    @abstractmethod
    def update_value_by_id(self, value_id: int, record: TranslationRecord) -> bool:
        """Replace key, culture, tenant and value of a row. False if missing."""
        pass

    @abstractmethod
    def delete_value(self, value_id: int) -> bool:
        pass

    @abstractmethod
    def delete_key(self, key: str) -> bool:
        """Delete a key and, by cascade, all of its values."""
        pass

    @abstractmethod
    def count_values(self) -> int:
        pass


class LocalizationStore(ABC):
    """Factory of ``LocalizationSession`` units of work."""

    @abstractmethod
    def session(self) -> AbstractContextManager[LocalizationSession]:
        """Open a session; commits on normal exit, rolls back on error."""
        pass

    @abstractmethod
    def create_schema(self) -> None:
        """Create the tables and indexes if they do not exist."""
        pass
