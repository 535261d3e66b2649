"""Declarative schema metadata for Pydantic models.

Fields opt into schema generation by carrying a :class:`SchemaProperty` in
their ``Annotated`` metadata; the root model is marked with
:func:`schema_definition`. :func:`describe_model` turns such a model graph
into the descriptors consumed by the generators::

    @schema_definition(title="Servlet configuration")
    class ServletDefinition(BaseModel):
        servlet_name: Annotated[str, SchemaProperty(required=True)] = Field(alias="servlet-name")

Property names come from the field alias when one is set, otherwise from the
field name (``initParams`` becomes ``init-params``).
"""

import importlib
import logging
import math
import os
import sys
import types
import typing
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from .errors import ConfigurationError
from .models.descriptor import FieldDescriptor, FieldKind, SchemaVersion, TypeDescriptor
from .schemas.generator import generate_schema
from .schemas.resolver import derive_property_name
from .schemas.sample import create_sample

logger = logging.getLogger(__name__)

_DEFINITION_ATTR = "__schema_definition__"


@dataclass(frozen=True)
class SchemaProperty:
    """Per-field schema metadata, attached through ``typing.Annotated``.

    ``as_kind`` overrides the structural kind inferred from the annotation and
    ``content_as`` names the model used for array items or nested objects.
    """
    description: str = ""
    examples: str | Sequence[str] = ()
    default_value: str = ""
    required: bool = False
    pattern: str = ""
    format: str = ""
    minimum: float = math.nan
    maximum: float = math.nan
    min_length: int = -1
    max_length: int = -1
    as_kind: FieldKind | None = None
    content_as: type[BaseModel] | None = None

    @property
    def example_list(self) -> tuple[str, ...]:
        if isinstance(self.examples, str):
            return (self.examples,) if self.examples else ()
        return tuple(self.examples)


@dataclass(frozen=True)
class SchemaDefinition:
    """Type-level schema metadata stored on a model class."""
    title: str
    description: str = ""
    version: SchemaVersion | str = SchemaVersion.DRAFT_07
    additional_properties: bool = False


def schema_definition(
    title: str,
    description: str = "",
    version: SchemaVersion | str = SchemaVersion.DRAFT_07,
    additional_properties: bool = False,
):
    """Class decorator marking a model as a schema root."""
    definition = SchemaDefinition(title, description, version, additional_properties)

    def decorator(cls):
        setattr(cls, _DEFINITION_ATTR, definition)
        return cls
    return decorator


def get_schema_definition(model: type) -> SchemaDefinition | None:
    """Return the definition declared directly on ``model`` (not inherited)."""
    return vars(model).get(_DEFINITION_ATTR)


def _unwrap_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def infer_kind(annotation: Any) -> tuple[FieldKind, type[BaseModel] | None]:
    """Infer the declared kind and nested model of a field annotation."""
    annotation = _unwrap_optional(annotation)
    origin = typing.get_origin(annotation) or annotation

    if isinstance(origin, type):
        if issubclass(origin, Mapping):
            return FieldKind.MAP, None
        if issubclass(origin, (list, tuple, set, frozenset)) or (
            issubclass(origin, Sequence) and not issubclass(origin, (str, bytes))
        ):
            args = typing.get_args(annotation)
            item = _unwrap_optional(args[0]) if args else None
            return FieldKind.ARRAY, item if _is_model(item) else None

    if _is_model(annotation):
        return FieldKind.OBJECT, annotation
    if annotation is bool:
        return FieldKind.BOOLEAN, None
    if isinstance(annotation, type) and issubclass(annotation, (int, float, Decimal)):
        return FieldKind.NUMBER, None
    return FieldKind.STRING, None


def _schema_property(field_info: FieldInfo) -> SchemaProperty | None:
    for item in field_info.metadata:
        if isinstance(item, SchemaProperty):
            return item
    return None


def _describe_field(
    field_name: str, field_info: FieldInfo, prop: SchemaProperty
) -> tuple[FieldDescriptor, list[type[BaseModel]]]:
    kind, nested = infer_kind(field_info.annotation)
    referenced = [model for model in (nested, prop.content_as) if model is not None]

    descriptor = FieldDescriptor(
        name=field_info.serialization_alias or field_info.alias or derive_property_name(field_name),
        description=prop.description or field_info.description or "",
        examples=prop.example_list,
        default_value=prop.default_value,
        required=prop.required,
        pattern=prop.pattern,
        format=prop.format,
        minimum=prop.minimum,
        maximum=prop.maximum,
        min_length=prop.min_length,
        max_length=prop.max_length,
        kind=kind,
        kind_override=prop.as_kind,
        item_type=nested.__name__ if nested else None,
        item_type_override=prop.content_as.__name__ if prop.content_as else None,
    )
    return descriptor, referenced


def _describe_type(
    model: type[BaseModel], definition: SchemaDefinition | None
) -> tuple[TypeDescriptor, list[type[BaseModel]]]:
    fields = []
    referenced: list[type[BaseModel]] = []

    for field_name, field_info in model.model_fields.items():
        prop = _schema_property(field_info)
        if prop is None:
            continue
        descriptor, nested = _describe_field(field_name, field_info, prop)
        fields.append(descriptor)
        referenced.extend(nested)

    if definition is None:
        type_descriptor = TypeDescriptor(name=model.__name__, fields=tuple(fields))
    else:
        type_descriptor = TypeDescriptor(
            name=model.__name__,
            version=definition.version,
            title=definition.title,
            description=definition.description,
            additional_properties=definition.additional_properties,
            fields=tuple(fields),
        )
    return type_descriptor, referenced


def describe_model(
    model: type[BaseModel], require_definition: bool = True
) -> tuple[TypeDescriptor, dict[str, TypeDescriptor]]:
    """Build descriptors for a model and every model reachable from it.

    Args:
        model: Root Pydantic model class
        require_definition: Fail if the root carries no ``@schema_definition``

    Returns:
        Root descriptor and a registry of all descriptors keyed by type name

    Raises:
        ConfigurationError: If the root is not a model or lacks a definition
    """
    if not _is_model(model):
        raise ConfigurationError(f"{model!r} is not a Pydantic model class")

    definition = get_schema_definition(model)
    if definition is None and require_definition:
        raise ConfigurationError(f"Root model {model.__name__} must be decorated with @schema_definition")

    root, pending = _describe_type(model, definition)
    registry = {root.name: root}
    owners = {root.name: model}
    seen = {model}

    while pending:
        nested = pending.pop(0)
        if nested in seen:
            continue
        seen.add(nested)
        descriptor, referenced = _describe_type(nested, get_schema_definition(nested))
        owner = owners.setdefault(descriptor.name, nested)
        if owner is not nested:
            raise ConfigurationError(
                f"Type name '{descriptor.name}' is used by both {owner.__module__}.{owner.__qualname__} "
                f"and {nested.__module__}.{nested.__qualname__}"
            )
        registry[descriptor.name] = descriptor
        pending.extend(referenced)

    logger.debug(f"Described {model.__name__} with {len(registry)} types")
    return root, registry


def generate_model_schema(model: type[BaseModel]) -> dict[str, Any]:
    """Generate the schema document for a decorated root model."""
    root, registry = describe_model(model)
    return generate_schema(root, registry)


def create_model_sample(model: type[BaseModel]) -> dict[str, Any]:
    """Synthesize a sample instance for a model."""
    root, registry = describe_model(model, require_definition=False)
    return create_sample(root, registry)


def import_model(reference: str) -> type[BaseModel]:
    """Import a model from a ``package.module:ClassName`` reference.

    The current working directory is searched first, so models next to the
    invocation directory resolve without installing them.
    """
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(f"Invalid model reference '{reference}', expected 'module:ClassName'")

    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module '{module_name}': {e}") from e

    model = module
    for part in attr.split("."):
        model = getattr(model, part, None)
        if model is None:
            raise ConfigurationError(f"Module '{module_name}' has no attribute '{attr}'")

    if not _is_model(model):
        raise ConfigurationError(f"'{reference}' is not a Pydantic model class")
    return model
