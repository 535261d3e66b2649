"""JSON Schema generation from type descriptors."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.validators import validator_for

from ..errors import ConfigurationError
from ..models.descriptor import FieldDescriptor, FieldKind, TypeDescriptor
from .resolver import nested_type_name, resolve_kind, resolve_schema_type

logger = logging.getLogger(__name__)

DEFINITIONS_POINTER = "#/definitions/"


class SchemaGenerator:
    """Generates JSON schema documents from type descriptors.

    Nested types referenced by array-of-T and object-of-T fields are looked up
    by name in ``types``. The root passed to :meth:`generate` is always
    resolvable under its own name.
    """

    def __init__(self, types: Mapping[str, TypeDescriptor] | None = None):
        self.types: dict[str, TypeDescriptor] = dict(types or {})

    def generate(self, root: TypeDescriptor) -> dict[str, Any]:
        """Generate the schema document for a root type.

        Args:
            root: Root type descriptor; must carry a version and a title

        Returns:
            Schema document with inlined root properties and a definitions table

        Raises:
            ConfigurationError: If the root lacks a version or title, or a
                nested type name cannot be resolved
        """
        if not root.version_url:
            raise ConfigurationError(f"Root type '{root.name}' has no schema version")
        if not root.title:
            raise ConfigurationError(f"Root type '{root.name}' has no title")

        registry = {**self.types, root.name: root}
        definitions: dict[str, dict[str, Any]] = {}
        visited: set[str] = set()

        schema: dict[str, Any] = {"$schema": root.version_url, "title": root.title}
        if root.description:
            schema["description"] = root.description
        schema["type"] = "object"
        schema["additionalProperties"] = root.additional_properties
        schema["definitions"] = definitions

        self._process_type(root, schema, registry, definitions, visited)

        logger.info(f"Generated schema '{root.title}' with {len(definitions)} definitions")
        return schema

    def _process_type(
        self,
        type_descriptor: TypeDescriptor,
        target: dict[str, Any],
        registry: dict[str, TypeDescriptor],
        definitions: dict[str, dict[str, Any]],
        visited: set[str],
    ) -> None:
        """Fill ``properties`` and ``required`` of ``target`` from a type's fields."""
        properties: dict[str, Any] = {}
        required: list[str] = []

        for field in type_descriptor.fields:
            properties[field.name] = self._build_property(field, registry, definitions, visited)
            if field.required:
                required.append(field.name)

        target["properties"] = properties
        if required:
            target["required"] = required

    def _expand_definition(
        self,
        type_name: str,
        registry: dict[str, TypeDescriptor],
        definitions: dict[str, dict[str, Any]],
        visited: set[str],
    ) -> None:
        if type_name in visited:
            return
        visited.add(type_name)

        nested = registry.get(type_name)
        if nested is None:
            raise ConfigurationError(f"Unknown nested type '{type_name}'")

        definition: dict[str, Any] = {"type": "object", "title": type_name}
        # Register before recursing so definitions keep first-visit order
        definitions[type_name] = definition
        self._process_type(nested, definition, registry, definitions, visited)
        logger.debug(f"Expanded definition '{type_name}'")

    def _build_property(
        self,
        field: FieldDescriptor,
        registry: dict[str, TypeDescriptor],
        definitions: dict[str, dict[str, Any]],
        visited: set[str],
    ) -> dict[str, Any]:
        """Assemble the sparse schema fragment for one field."""
        node: dict[str, Any] = {}

        if field.description:
            node["description"] = field.description
        if field.default_value:
            node["default"] = field.default_value
        if field.examples:
            node["examples"] = list(field.examples)
        if field.pattern:
            node["pattern"] = field.pattern
        if field.format:
            node["format"] = field.format
        if field.has_minimum:
            node["minimum"] = field.minimum
        if field.has_maximum:
            node["maximum"] = field.maximum

        node["type"] = resolve_schema_type(field)

        type_name = nested_type_name(field)
        if type_name:
            self._expand_definition(type_name, registry, definitions, visited)
            ref = {"$ref": DEFINITIONS_POINTER + type_name}
            if resolve_kind(field) == FieldKind.ARRAY:
                node["items"] = ref
            else:
                node.update(ref)

        return node


def generate_schema(
    root: TypeDescriptor, types: Mapping[str, TypeDescriptor] | None = None
) -> dict[str, Any]:
    """Generate a schema document for ``root``; see :class:`SchemaGenerator`."""
    return SchemaGenerator(types).generate(root)


def schema_to_json(
    document: Mapping[str, Any], pretty: bool = True, indent: int = 2, ensure_ascii: bool = False
) -> str:
    """Serialize a schema or instance document with explicit formatting."""
    if pretty:
        return json.dumps(document, indent=indent, ensure_ascii=ensure_ascii)
    return json.dumps(document, separators=(",", ":"), ensure_ascii=ensure_ascii)


def check_schema(document: Mapping[str, Any]) -> list[str]:
    """Check a schema document against its JSON Schema meta-schema.

    Returns:
        List of compliance problems (empty if the document is a valid schema)
    """
    validator_cls = validator_for(document, default=Draft7Validator)
    meta_validator = validator_cls(validator_cls.META_SCHEMA)

    problems = []
    for error in meta_validator.iter_errors(document):
        location = "/".join(str(part) for part in error.absolute_path) or "#"
        problems.append(f"{location}: {error.message}")

    if problems:
        logger.warning(f"Schema has {len(problems)} compliance problems")
    return problems
