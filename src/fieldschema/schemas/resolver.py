"""Logical schema type resolution for field descriptors."""

import re

from ..models.descriptor import FieldDescriptor, FieldKind

_SCHEMA_TYPES = {
    FieldKind.ARRAY: "array",
    FieldKind.MAP: "object",
    FieldKind.OBJECT: "object",
    FieldKind.NUMBER: "number",
    FieldKind.BOOLEAN: "boolean",
}

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z]+)")


def resolve_kind(field: FieldDescriptor) -> FieldKind:
    """Return the effective structural kind, honouring the override hint."""
    return field.kind_override or field.kind


def resolve_schema_type(field: FieldDescriptor) -> str:
    """Map a field to one of the JSON types array/object/number/boolean/string."""
    return _SCHEMA_TYPES.get(resolve_kind(field), "string")


def resolve_item_type(field: FieldDescriptor) -> str | None:
    """Return the nested type name for array-of-T and object-of-T fields."""
    return field.item_type_override or field.item_type


def nested_type_name(field: FieldDescriptor) -> str | None:
    """Nested type name when the field links to a definition, else None."""
    if resolve_kind(field) in (FieldKind.ARRAY, FieldKind.OBJECT):
        return resolve_item_type(field)
    return None


def derive_property_name(identifier: str) -> str:
    """Derive the default property name for an identifier.

    ``servletName`` becomes ``servlet-name`` and ``parseURL`` becomes
    ``parse-url``.
    """
    return _CAMEL_BOUNDARY.sub(r"\1-\2", identifier).lower()
