"""Effective type inference for schemas without an explicit type."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_OBJECT_KEYWORDS = (
    "properties",
    "additionalProperties",
    "patternProperties",
    "minProperties",
    "maxProperties",
    "required",
    "dependencies",
)
_ARRAY_KEYWORDS = ("items", "additionalItems", "maxItems", "minItems", "uniqueItems")
_NUMERIC_KEYWORDS = ("exclusiveMaximum", "exclusiveMinimum", "maximum", "minimum", "multipleOf")
# String length and pattern constraints are reported as numeric here.
_LENGTH_KEYWORDS = ("maxLength", "minLength", "pattern")


def infer_type(schema: Mapping[str, Any]) -> str:
    """Return the schema's type, inferred from keyword hints when it has none.

    Exactly one distinct candidate type is returned as-is; no candidates or
    several conflicting ones yield ``"any"``.
    """
    explicit = schema.get("type")
    if explicit:
        return explicit if isinstance(explicit, str) else "|".join(str(item) for item in explicit)

    candidates: list[str] = []
    if _has_any(schema, _OBJECT_KEYWORDS):
        _add_candidate(candidates, "object")
    if _has_any(schema, _ARRAY_KEYWORDS):
        _add_candidate(candidates, "array")
    if _has_any(schema, _NUMERIC_KEYWORDS):
        _add_candidate(candidates, "number")
    if _has_any(schema, _LENGTH_KEYWORDS):
        _add_candidate(candidates, "number")
    enum_values = schema.get("enum")
    if isinstance(enum_values, list):
        for value in enum_values:
            _add_candidate(candidates, json_type_of(value))

    if len(candidates) == 1:
        return candidates[0]
    return "any"


def json_type_of(value: Any) -> str:
    """Return the runtime type name of a JSON value."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def _has_any(schema: Mapping[str, Any], keywords: tuple[str, ...]) -> bool:
    return any(keyword in schema for keyword in keywords)


def _add_candidate(candidates: list[str], candidate: str) -> None:
    if candidate not in candidates:
        candidates.append(candidate)
