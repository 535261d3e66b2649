"""Configuration management for fieldschema using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".fieldschema.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class OutputConfig(BaseModel):
    """Output formatting section."""
    pretty: bool = True
    indent: int = 2
    ensure_ascii: bool = Field(alias="ensureAscii", default=False)

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v):
        if not (1 <= v <= 8):
            raise ValueError(f"indent must be between 1-8, got: {v}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class SchemaConfig(BaseModel):
    """Schema generation section."""
    check_compliance: bool = Field(alias="checkCompliance", default=True)

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class FieldSchemaConfig(BaseModel):
    """Complete fieldschema configuration model."""
    output: OutputConfig = Field(default_factory=OutputConfig)
    schema_: SchemaConfig = Field(alias="schema", default_factory=SchemaConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


def load_config(config_path: str | Path | None = None) -> FieldSchemaConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .fieldschema.json

    Returns:
        FieldSchemaConfig: Loaded and validated configuration

    Raises:
        ConfigurationError: If the config file is missing, unreadable or invalid
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return FieldSchemaConfig()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
        return FieldSchemaConfig(**config_data)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}") from e
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(f"Invalid config in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to load config from {config_path}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest CONFIG_FILENAME in start_dir or one of its parents."""
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.exists():
            logger.debug(f"Using config file {candidate}")
            return candidate
    return None
