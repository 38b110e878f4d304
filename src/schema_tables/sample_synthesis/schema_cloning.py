"""Cycle-safe copies of schema graphs."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from schema_tables.document_loading.pointer_resolution import RESOLVED_REF_MARKER

CIRCULAR_PLACEHOLDER = "[Circular]"


def circular_clone(value: Any) -> Any:
    """Deep-copy a schema graph, cutting cycles with back-reference placeholders.

    A mapping met again while it is still being copied becomes ``{"$ref": ...}``
    pointing at its resolved-from pointer, or ``{}`` when it carries none.
    Shared but acyclic nodes are copied once per occurrence.
    """
    return _clone(value, set())


def json_roundtrip_clone(value: Any) -> Any:
    """Copy a value through JSON text, replacing cycles and non-JSON values."""
    return json.loads(json.dumps(_decycle(value, set()), default=str))


def _clone(value: Any, ancestors: set[int]) -> Any:
    if isinstance(value, Mapping):
        if id(value) in ancestors:
            return _back_reference(value)
        ancestors.add(id(value))
        try:
            return {key: _clone(child, ancestors) for key, child in value.items()}
        finally:
            ancestors.discard(id(value))
    if isinstance(value, list | tuple):
        if id(value) in ancestors:
            return []
        ancestors.add(id(value))
        try:
            return [_clone(item, ancestors) for item in value]
        finally:
            ancestors.discard(id(value))
    return value


def _back_reference(node: Mapping[str, Any]) -> dict[str, Any]:
    pointer = node.get(RESOLVED_REF_MARKER) or node.get("$ref")
    if isinstance(pointer, str):
        return {"$ref": pointer}
    return {}


def _decycle(value: Any, ancestors: set[int]) -> Any:
    if isinstance(value, Mapping | list | tuple):
        if id(value) in ancestors:
            return CIRCULAR_PLACEHOLDER
        ancestors.add(id(value))
        try:
            if isinstance(value, Mapping):
                return {str(key): _decycle(child, ancestors) for key, child in value.items()}
            return [_decycle(item, ancestors) for item in value]
        finally:
            ancestors.discard(id(value))
    return value
