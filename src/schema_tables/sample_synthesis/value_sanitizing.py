"""Sanitizing and depth-limiting of synthesized values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from schema_tables.document_loading.pointer_resolution import MARKER_PREFIX


def strip_marker_keys(value: Any) -> Any:
    """Return a copy of the value without internal marker keys at any level."""
    if isinstance(value, Mapping):
        return {
            key: strip_marker_keys(child)
            for key, child in value.items()
            if not (isinstance(key, str) and key.startswith(MARKER_PREFIX))
        }
    if isinstance(value, list):
        return [strip_marker_keys(item) for item in value]
    return value


def truncate_depth(value: Any, max_depth: int) -> Any:
    """Return a copy of the value with containers at level >= max_depth emptied.

    Direct children of the value sit at level 0. A non-positive max_depth
    leaves the value untouched.
    """
    if max_depth <= 0:
        return value
    return _truncate(value, 0, max_depth)


def _truncate(value: Any, level: int, max_depth: int) -> Any:
    if isinstance(value, Mapping):
        return {key: _truncate_child(child, level, max_depth) for key, child in value.items()}
    if isinstance(value, list):
        return [_truncate_child(item, level, max_depth) for item in value]
    return value


def _truncate_child(child: Any, level: int, max_depth: int) -> Any:
    if level >= max_depth:
        if isinstance(child, Mapping):
            return {}
        if isinstance(child, list):
            return []
    return _truncate(child, level + 1, max_depth)
