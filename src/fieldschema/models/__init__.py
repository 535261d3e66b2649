"""Pydantic descriptor models for schema generation."""

from fieldschema.models.descriptor import (
    FieldDescriptor,
    FieldKind,
    SchemaVersion,
    TypeDescriptor,
)

__all__ = [
    "FieldDescriptor",
    "FieldKind",
    "SchemaVersion",
    "TypeDescriptor",
]
