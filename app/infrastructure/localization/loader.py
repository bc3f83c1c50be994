"""Descriptor loading interface and implementations.

Localizable fields are declared explicitly. Besides building
``LocalizableFieldDescriptor`` lists in code, applications can keep them in
YAML files loaded at startup.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List

import yaml

from infrastructure.localization.models import LocalizableFieldDescriptor
from infrastructure.logging import get_module_logger

logger = get_module_logger()

DESCRIPTOR_OPTIONS = (
    "key",
    "display_name_key",
    "display_message_key",
    "error_message_key",
    "culture",
    "fallback_to_default",
)


class DescriptorLoader(ABC):
    """Abstract base for descriptor loaders."""

    @abstractmethod
    def load(self) -> List[LocalizableFieldDescriptor]:
        """Load all descriptors.

        Raises:
            ValueError: If a descriptor source is malformed.
        """
        pass


class YAMLDescriptorLoader(DescriptorLoader):
    """Loader for YAML descriptor files (``*.yml`` and ``*.yaml``).

    Expected format, owner then field; options are optional and the primary
    key defaults to ``Owner.Field``:

        Order:
          Status:
            display_name_key: Order.Status.Display
            error_message_key: Order.Status.Error
          Notes: {}

    Attributes:
        descriptors_dir: Directory containing the YAML files.
    """

    def __init__(self, descriptors_dir: Path):
        self.descriptors_dir = Path(descriptors_dir)

        if not self.descriptors_dir.is_dir():
            raise ValueError(f"Descriptors directory not found: {self.descriptors_dir}")

        logger.info("initialized_yaml_descriptor_loader", descriptors_dir=str(self.descriptors_dir))

    def load(self) -> List[LocalizableFieldDescriptor]:
        yaml_files = sorted(
            list(self.descriptors_dir.glob("*.yml")) + list(self.descriptors_dir.glob("*.yaml"))
        )

        descriptors: List[LocalizableFieldDescriptor] = []
        for yaml_file in yaml_files:
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
                raise ValueError(f"Failed to parse {yaml_file}: {e}") from e

            if data:
                descriptors.extend(self.parse(data, source=str(yaml_file)))

        logger.info(
            "loaded_descriptors",
            file_count=len(yaml_files),
            descriptor_count=len(descriptors),
        )
        return descriptors

    @staticmethod
    def parse(data: Any, source: str = "<memory>") -> List[LocalizableFieldDescriptor]:
        """Build descriptors from parsed YAML data.

        Args:
            data: Mapping of owner name to a mapping of field name to options.
            source: Name of the data source, for error messages.

        Raises:
            ValueError: If the structure or an option is invalid.
        """
        if not isinstance(data, dict):
            raise ValueError(f"{source}: expected a mapping of owners to fields")

        descriptors = []
        for owner, fields in data.items():
            if not isinstance(fields, dict):
                raise ValueError(f"{source}: fields of {owner!r} must be a mapping")

            for field_name, options in fields.items():
                options = options or {}
                if not isinstance(options, dict):
                    raise ValueError(f"{source}: options of {owner}.{field_name} must be a mapping")

                unknown = set(options) - set(DESCRIPTOR_OPTIONS)
                if unknown:
                    raise ValueError(
                        f"{source}: unknown options for {owner}.{field_name}: {sorted(unknown)}"
                    )

                kwargs: Dict[str, Any] = {k: v for k, v in options.items() if v is not None}
                if "fallback_to_default" in kwargs:
                    kwargs["fallback_to_default"] = bool(kwargs["fallback_to_default"])
                descriptors.append(
                    LocalizableFieldDescriptor.for_field(str(owner), str(field_name), **kwargs)
                )
        return descriptors
