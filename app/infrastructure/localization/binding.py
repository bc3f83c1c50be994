"""Apply localized values to objects described by field descriptors."""

from typing import Any, Iterable

from infrastructure.localization.localizer import DatabaseStringLocalizer
from infrastructure.localization.models import LocalizableFieldDescriptor


def apply_localization(
    model: Any,
    descriptors: Iterable[LocalizableFieldDescriptor],
    localizer: DatabaseStringLocalizer,
) -> Any:
    """Set each described field of ``model`` to its localized value, in place.

    A field is updated when its key resolves, or when the descriptor has
    ``fallback_to_default`` set (the key itself is then applied). Fields of a
    descriptor with a fixed culture are resolved in that culture.

    Returns:
        The same model, for chaining.
    """
    for descriptor in descriptors:
        scoped = localizer.with_culture(descriptor.culture) if descriptor.culture else localizer
        localized = scoped[descriptor.key]
        if localized.found or descriptor.fallback_to_default:
            setattr(model, descriptor.field_name, localized.value)
    return model
