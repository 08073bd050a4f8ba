"""
Load OpenAPI documents from disk.

The whole file is read into memory, then parsed as YAML (``.yaml`` /
``.yml``) or JSON (anything else).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from ..errors import SchemaLoadError, SchemaParseError

YAML_EXTENSIONS = {".yaml", ".yml"}


def is_yaml_path(path: Path) -> bool:
    return path.suffix.lower() in YAML_EXTENSIONS


def load_document(path: str | Path) -> dict[str, Any]:
    """Read and parse a structured document.

    Raises:
        SchemaLoadError: If the file cannot be read
        SchemaParseError: If the content is not valid JSON/YAML or is not a mapping
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaLoadError(f"Failed to read {path}: {e}") from e

    return parse_document(content, path)


def parse_document(content: str, path: Path) -> dict[str, Any]:
    """Parse document text; ``path`` selects the format and names errors."""
    try:
        if is_yaml_path(path):
            document = yaml.safe_load(content)
        else:
            document = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SchemaParseError(f"Failed to parse {path}: {e}") from e

    if not isinstance(document, dict):
        raise SchemaParseError(f"Failed to parse {path}: top-level value must be a mapping, got {type(document).__name__}")
    return document
