"""Exception hierarchy for fieldschema.

Validation violations are not exceptions: they are returned by the validator
as a set of ``ValidationError`` values. The classes here cover failures that
abort an operation entirely.
"""


class FieldSchemaError(Exception):
    """Base class for all fieldschema failures."""


class ConfigurationError(FieldSchemaError):
    """Raised when descriptors, models or config files are incomplete or invalid."""


class ParseError(FieldSchemaError):
    """Raised for malformed instance, schema or example JSON text."""


class ResourceError(FieldSchemaError):
    """Raised when a schema or document cannot be read or written."""

    def __init__(self, location: str, message: str):
        self.location = location
        super().__init__(f"{location}: {message}")


class SampleWarning(UserWarning):
    """Emitted when a field is dropped from a synthesized sample."""
