"""Exceptions raised by the localization system.

Missing translations are never reported through exceptions; lookups return
the key with ``resource_not_found`` set instead.
"""


class LocalizationError(Exception):
    """Base exception for all localization errors.

    Example:
        try:
            admin.import_json(payload)
        except LocalizationError as e:
            logger.error("localization_error", error=str(e))
    """


class LocalizationConfigurationError(LocalizationError):
    """Raised at startup when the store cannot be wired.

    Covers a missing connection URL or an unknown database provider name.
    """


class TranslationNotFoundError(LocalizationError):
    """Raised when an admin operation targets a translation row that does not exist."""

    def __init__(self, value_id: int):
        self.value_id = value_id
        super().__init__(f"Translation value {value_id} not found")


class InvalidImportError(LocalizationError):
    """Raised when an import payload cannot be parsed at all.

    Individual malformed rows are skipped rather than raising this error.
    """


class DuplicateTranslationError(LocalizationError):
    """Raised when a create or update would duplicate a (key, culture, tenant) row."""
