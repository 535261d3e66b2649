"""Type and field descriptors driving schema and sample generation."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SchemaVersion(str, Enum):
    """Supported JSON Schema specification versions."""
    DRAFT_07 = "http://json-schema.org/draft-07/schema#"


class FieldKind(str, Enum):
    """Declared structural type of a field."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    MAP = "map"
    OBJECT = "object"


class FieldDescriptor(BaseModel):
    """Metadata controlling one property's schema fragment.

    Text options use the empty string for "unset", numeric bounds use NaN
    and length bounds use a negative number.
    """
    name: str
    description: str = ""
    examples: tuple[str, ...] = ()
    default_value: str = Field(alias="defaultValue", default="")
    required: bool = False
    pattern: str = ""
    format: str = ""
    minimum: float = math.nan
    maximum: float = math.nan
    min_length: int = Field(alias="minLength", default=-1)
    max_length: int = Field(alias="maxLength", default=-1)

    kind: FieldKind = FieldKind.STRING
    kind_override: FieldKind | None = Field(alias="kindOverride", default=None)
    item_type: str | None = Field(alias="itemType", default=None)  # nested TypeDescriptor name
    item_type_override: str | None = Field(alias="itemTypeOverride", default=None)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError("field name must not be empty")
        return v

    @property
    def has_minimum(self) -> bool:
        return not math.isnan(self.minimum)

    @property
    def has_maximum(self) -> bool:
        return not math.isnan(self.maximum)

    @property
    def has_min_length(self) -> bool:
        return self.min_length >= 0

    @property
    def has_max_length(self) -> bool:
        return self.max_length >= 0

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TypeDescriptor(BaseModel):
    """Structural and presentation metadata for one data type."""
    name: str
    version: SchemaVersion | str | None = None
    title: str = ""
    description: str = ""
    additional_properties: bool = Field(alias="additionalProperties", default=False)
    fields: tuple[FieldDescriptor, ...] = ()

    @property
    def version_url(self) -> str | None:
        """Schema version as a plain URL string."""
        if isinstance(self.version, SchemaVersion):
            return self.version.value
        return self.version or None

    def field(self, name: str) -> FieldDescriptor | None:
        """Look up a field by its schema property name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    model_config = ConfigDict(frozen=True, populate_by_name=True)
