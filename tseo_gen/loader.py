"""Load an OpenAPI document from disk.

Reads YAML or JSON and extracts the top-level tags and paths.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .errors import SpecificationError

YAML_SUFFIXES = {".yml", ".yaml"}


def load_spec(path: Path) -> dict[str, Any]:
    """Load an OpenAPI document.

    Files ending in ``.yml``/``.yaml`` are parsed as YAML, anything else
    as JSON.

    Raises:
        SpecificationError: If the file cannot be read or parsed, or its
            root is not a mapping.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SpecificationError(f"Failed to read document: {e}", str(path)) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except yaml.YAMLError as e:
        raise SpecificationError(f"Invalid YAML: {e}", str(path)) from e
    except json.JSONDecodeError as e:
        raise SpecificationError(f"Invalid JSON: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise SpecificationError("Document root must be a mapping", str(path))

    return data


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_tags(spec: dict[str, Any]) -> list[dict[str, Any]]:
    """Extract the tag declarations from the spec."""
    return spec.get("tags") or []
