"""Reading and writing JSON documents for schema generation and validation."""

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlparse
from urllib.request import url2pathname

from .errors import ConfigurationError, ParseError, ResourceError

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http", "https")


def parse_json(text: str, source: str = "<string>") -> Any:
    """Decode JSON text, raising ParseError on malformed input."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in {source}: {e}") from e


def load_json(path: str | Path) -> Any:
    """Load a JSON document from a file.

    Raises:
        ResourceError: If the file cannot be read
        ParseError: If the file is not valid JSON
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ResourceError(str(path), f"Failed to read file: {e}") from e
    return parse_json(text, str(path))


def write_json(
    document: Any, path: str | Path, pretty: bool = True, indent: int = 2, ensure_ascii: bool = False
) -> Path:
    """Write a document as JSON with explicit formatting options.

    Returns:
        Path of the written file
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            if pretty:
                json.dump(document, f, indent=indent, ensure_ascii=ensure_ascii)
            else:
                json.dump(document, f, separators=(",", ":"), ensure_ascii=ensure_ascii)
    except OSError as e:
        logger.error(f"Error writing JSON document to '{path}': {e}")
        raise ResourceError(str(path), f"Failed to write file: {e}") from e

    logger.info(f"JSON document written to '{path}'")
    return path


def resolve_schema_location(instance: Any, base_dir: str | Path = ".") -> Path:
    """Resolve the local schema file named by an instance's ``$schema`` property.

    Args:
        instance: Decoded JSON instance
        base_dir: Directory relative schema paths are resolved against

    Returns:
        Path to the schema file

    Raises:
        ConfigurationError: If the instance has no usable ``$schema`` property
        ResourceError: If ``$schema`` points to a remote location
    """
    location = instance.get("$schema") if isinstance(instance, dict) else None
    if not isinstance(location, str) or not location.strip():
        raise ConfigurationError(
            "JSON instance does not contain a valid textual '$schema' property. "
            "Supply a schema explicitly."
        )

    parsed = urlparse(location)
    if parsed.scheme in REMOTE_SCHEMES:
        raise ResourceError(location, "Remote schema validation is not supported; use a local schema file")
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    # Single letters are Windows drive prefixes, not URI schemes
    if parsed.scheme and len(parsed.scheme) > 1:
        raise ResourceError(location, f"Unsupported $schema URI scheme '{parsed.scheme}'")

    path = Path(location)
    if not path.is_absolute():
        path = Path(base_dir) / path
    return path
