"""Sample instance synthesis from default values and example payloads."""

import json
import logging
import warnings
from collections.abc import Mapping
from typing import Any

from ..errors import ConfigurationError, SampleWarning
from ..models.descriptor import FieldDescriptor, FieldKind, TypeDescriptor
from .resolver import resolve_item_type, resolve_kind

logger = logging.getLogger(__name__)


class SampleBuilder:
    """Builds example instance documents from type descriptors."""

    def __init__(self, types: Mapping[str, TypeDescriptor] | None = None):
        self.types: dict[str, TypeDescriptor] = dict(types or {})

    def create(self, type_descriptor: TypeDescriptor) -> dict[str, Any]:
        """Synthesize a sample instance for a type.

        Fields without a default, a nested array type or a parseable example
        are omitted rather than set to null.
        """
        registry = {**self.types, type_descriptor.name: type_descriptor}
        return self._sample_type(type_descriptor, registry, [])

    def _sample_type(
        self, type_descriptor: TypeDescriptor, registry: dict[str, TypeDescriptor], stack: list[str]
    ) -> dict[str, Any]:
        stack.append(type_descriptor.name)
        sample: dict[str, Any] = {}

        for field in type_descriptor.fields:
            value = self._sample_field(field, registry, stack)
            if value is not None:
                sample[field.name] = value

        stack.pop()
        return sample

    def _sample_field(
        self, field: FieldDescriptor, registry: dict[str, TypeDescriptor], stack: list[str]
    ) -> Any | None:
        if field.default_value:
            return field.default_value

        kind = resolve_kind(field)
        item_type = resolve_item_type(field)

        if kind == FieldKind.ARRAY and item_type:
            if item_type in stack:
                logger.debug(f"Skipping recursive sample for '{field.name}' of type '{item_type}'")
                return None
            nested = registry.get(item_type)
            if nested is None:
                raise ConfigurationError(f"Unknown nested type '{item_type}'")
            return [self._sample_type(nested, registry, stack)]

        if kind in (FieldKind.MAP, FieldKind.OBJECT) and field.examples:
            example = field.examples[0]
            try:
                value = json.loads(example)
            except json.JSONDecodeError as e:
                self._warn_example(field, example, str(e))
                return None
            if not isinstance(value, dict):
                self._warn_example(field, example, f"expected a JSON object, got {type(value).__name__}")
                return None
            return value

        return None

    def _warn_example(self, field: FieldDescriptor, example: str, reason: str) -> None:
        message = f"Could not parse example JSON for field '{field.name}': {example}"
        logger.warning(f"{message} ({reason})")
        warnings.warn(message, SampleWarning, stacklevel=4)


def create_sample(
    type_descriptor: TypeDescriptor, types: Mapping[str, TypeDescriptor] | None = None
) -> dict[str, Any]:
    """Synthesize a sample instance; see :class:`SampleBuilder`."""
    return SampleBuilder(types).create(type_descriptor)
