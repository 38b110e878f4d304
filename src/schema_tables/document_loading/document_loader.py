"""API document loading service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .pointer_resolution import resolve_pointer


class DocumentError(Exception):
    """Raised when an API document cannot be loaded or addressed."""


def load_api_document(document_path: Path | str) -> Mapping[str, Any]:
    """Parse a JSON or YAML API document into a mapping."""
    path = Path(document_path)
    if not path.exists():
        raise DocumentError(f"API document not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DocumentError(f"Failed to parse API document {path}: {exc}") from exc

    if not isinstance(parsed, Mapping):
        raise DocumentError("API document root must be a mapping.")
    return parsed


def select_schema(document: Mapping[str, Any], pointer: str) -> Mapping[str, Any]:
    """Return the schema node a pointer addresses, failing loudly on a miss."""
    schema = resolve_pointer(document, pointer)
    if schema is None:
        raise DocumentError(f"Pointer does not resolve in API document: {pointer}")
    if not isinstance(schema, Mapping):
        raise DocumentError(f"Pointer does not address a schema object: {pointer}")
    return schema
