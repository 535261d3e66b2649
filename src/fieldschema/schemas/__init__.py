"""JSON Schema generation, sample synthesis and validation.

This package turns type descriptors into draft-07 schema documents, builds
sample instances from the same descriptors and checks instances against
schema documents with a minimal structural validator.
"""

from .generator import SchemaGenerator, check_schema, generate_schema, schema_to_json
from .resolver import derive_property_name, resolve_schema_type
from .sample import SampleBuilder, create_sample
from .validator import SchemaValidator, ValidationError, format_errors, validate

__all__ = [
    "SchemaGenerator",
    "SampleBuilder",
    "SchemaValidator",
    "ValidationError",
    "check_schema",
    "create_sample",
    "derive_property_name",
    "format_errors",
    "generate_schema",
    "resolve_schema_type",
    "schema_to_json",
    "validate",
]
