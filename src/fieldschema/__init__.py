"""fieldschema - JSON Schema generation and validation from field metadata.

fieldschema derives draft-07 JSON Schema documents from declarative per-field
metadata, synthesizes sample instances from defaults and examples, and checks
instances against schema documents with a minimal structural validator.
"""

__version__ = "0.1.0"
__description__ = "JSON Schema generation and validation from declarative field metadata"

from fieldschema.errors import (
    ConfigurationError,
    FieldSchemaError,
    ParseError,
    ResourceError,
    SampleWarning,
)
from fieldschema.models import FieldDescriptor, FieldKind, SchemaVersion, TypeDescriptor
from fieldschema.schemas import ValidationError, create_sample, generate_schema, validate

__all__ = [
    "__version__",
    "__description__",
    "ConfigurationError",
    "FieldDescriptor",
    "FieldKind",
    "FieldSchemaError",
    "ParseError",
    "ResourceError",
    "SampleWarning",
    "SchemaVersion",
    "TypeDescriptor",
    "ValidationError",
    "create_sample",
    "generate_schema",
    "validate",
]
