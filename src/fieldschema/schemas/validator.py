"""Minimal structural validation of JSON instances against schema documents."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..documents import load_json, resolve_schema_location
from ..errors import ParseError

logger = logging.getLogger(__name__)

ROOT_PATH = "#"


@dataclass(frozen=True)
class ValidationError:
    """A single path-tagged schema violation."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"'{self.path}': {self.message}"


def json_type(value: Any) -> str:
    """Name the JSON type of a decoded value."""
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if value is None:
        return "null"
    return "unknown"


def _child_path(path: str, key: str | int) -> str:
    return str(key) if path == ROOT_PATH else f"{path}/{key}"


def _type_matches(expected: Any, actual: str) -> bool:
    if isinstance(expected, list):
        return "any" in expected or actual in expected
    return expected == "any" or expected == actual


def _describe_type(expected: Any) -> str:
    if isinstance(expected, list):
        return ", ".join(str(item) for item in expected)
    return str(expected)


def _full_match(pattern: str, value: str) -> bool:
    try:
        return re.fullmatch(pattern, value) is not None
    except re.error as e:
        raise ParseError(f"Invalid pattern '{pattern}' in schema: {e}") from e


def _validate_node(node: Any, schema: dict[str, Any], path: str, errors: set[ValidationError]) -> None:
    fields = node if isinstance(node, dict) else {}

    for name in schema.get("required", []):
        if name not in fields:
            errors.add(ValidationError(path, f"required property '{name}' is missing"))

    properties = schema.get("properties") or {}
    for key, value in fields.items():
        # Undeclared keys are ignored; additionalProperties is not enforced
        if key not in properties:
            continue

        property_schema = properties[key]
        if not isinstance(property_schema, dict):
            continue
        current_path = _child_path(path, key)

        expected = property_schema.get("type", "any")
        actual = json_type(value)
        if not _type_matches(expected, actual):
            errors.add(ValidationError(
                current_path,
                f"invalid type. Expected '{_describe_type(expected)}' but found '{actual}'"
            ))
            continue

        pattern = property_schema.get("pattern")
        if pattern is not None and isinstance(value, str) and not _full_match(pattern, value):
            errors.add(ValidationError(
                current_path,
                f"string value '{value}' does not match pattern '{pattern}'"
            ))

        if isinstance(value, dict):
            _validate_node(value, property_schema, current_path, errors)
        elif isinstance(value, list) and isinstance(property_schema.get("items"), dict):
            for index, item in enumerate(value):
                _validate_node(item, property_schema["items"], f"{current_path}/{index}", errors)


def validate(instance: Any, schema: dict[str, Any]) -> set[ValidationError]:
    """Validate a decoded JSON instance against a schema document.

    Args:
        instance: Decoded JSON instance
        schema: Decoded schema document (generated or externally supplied)

    Returns:
        Set of violations; empty if the instance is valid

    Raises:
        ParseError: If the schema is not an object or declares an invalid pattern
    """
    if not isinstance(schema, dict):
        raise ParseError(f"Schema must be a JSON object, got {json_type(schema)}")

    errors: set[ValidationError] = set()
    _validate_node(instance, schema, ROOT_PATH, errors)
    return errors


class SchemaValidator:
    """Validates instance files and documents against schema documents."""

    def __init__(self, schema: dict[str, Any] | None = None):
        self.schema = schema

    def validate(self, instance: Any, schema: dict[str, Any] | None = None) -> set[ValidationError]:
        """Validate a decoded instance against ``schema`` or the bound schema."""
        schema = schema if schema is not None else self.schema
        if schema is None:
            raise ParseError("No schema supplied for validation")
        return validate(instance, schema)

    def validate_file(self, instance_path: Path, schema_path: Path | None = None) -> set[ValidationError]:
        """Validate an instance file.

        Args:
            instance_path: Path to the JSON instance
            schema_path: Explicit schema file; when omitted the bound schema is
                used, falling back to the instance's ``$schema`` property

        Returns:
            Set of violations; empty if the instance is valid
        """
        instance = load_json(instance_path)

        if schema_path is not None:
            schema = load_json(schema_path)
        elif self.schema is not None:
            schema = self.schema
        else:
            schema = load_json(resolve_schema_location(instance, Path(instance_path).parent))

        errors = self.validate(instance, schema)
        if errors:
            logger.warning(f"Validation errors in {instance_path}: {len(errors)} issues found")
        else:
            logger.info(f"Instance {instance_path} is valid")
        return errors


def format_errors(errors: set[ValidationError]) -> list[str]:
    """Render violations as sorted ``'<path>': <reason>`` strings."""
    return sorted(str(error) for error in errors)
