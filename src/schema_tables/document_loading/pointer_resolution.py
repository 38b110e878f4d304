"""JSON pointer lookup against an API document."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

MARKER_PREFIX = "x-schema-tables-"
RESOLVED_REF_MARKER = f"{MARKER_PREFIX}oldRef"
SCHEMA_COMPONENTS_PREFIX = "#/components/schemas/"


def resolve_pointer(document: Any, pointer: str) -> Any | None:
    """Return the value a local `#/...` pointer addresses, or None when it misses."""
    if not isinstance(pointer, str) or not pointer.startswith("#"):
        return None
    fragment = pointer[1:]
    if not fragment:
        return document
    if not fragment.startswith("/"):
        return None

    current = document
    for raw_token in fragment[1:].split("/"):
        token = raw_token.replace("~1", "/").replace("~0", "~")
        if isinstance(current, Mapping):
            if token not in current:
                return None
            current = current[token]
        elif isinstance(current, Sequence) and not isinstance(current, str):
            if not token.isdigit() or int(token) >= len(current):
                return None
            current = current[int(token)]
        else:
            return None
    return current


def reference_name(pointer: str) -> str:
    """Return the display name of a reference pointer."""
    return pointer.replace(SCHEMA_COMPONENTS_PREFIX, "")


def reference_link(pointer: str) -> str:
    """Render a reference pointer as a Markdown link to its schema anchor."""
    name = reference_name(pointer)
    return f"[{name}](#schema{name.lower()})"
