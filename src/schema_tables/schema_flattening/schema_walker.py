"""Depth-first traversal of schema trees."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

COMBINATOR_KEYWORDS = ("allOf", "anyOf", "oneOf")


@dataclass(frozen=True)
class WalkState:
    """Position of the node currently handed to the visitor."""

    depth: int = 0
    property_path: str | None = None
    top: bool = True

    @property
    def segment(self) -> str | None:
        """Return the path segment after the keyword, e.g. ``id`` for ``properties/id``."""
        if self.property_path is None or "/" not in self.property_path:
            return None
        return self.property_path.split("/", 1)[1]


SchemaVisitor = Callable[[Mapping[str, Any], Mapping[str, Any], WalkState], None]


def walk_schema(schema: Mapping[str, Any] | None, visitor: SchemaVisitor) -> None:
    """Visit every schema node depth-first in declaration order.

    Raw references are reported with their sibling keys and never followed.
    A combinator holding a single branch is merged into the node that owns it.
    Nodes reached a second time are reported again but not descended into.
    """
    _walk(schema, {}, WalkState(), visitor, seen=set())


def _walk(
    node: Any,
    parent: Mapping[str, Any],
    state: WalkState,
    visitor: SchemaVisitor,
    *,
    seen: set[int],
) -> None:
    if not isinstance(node, Mapping):
        return
    if "$ref" in node:
        visitor(node, parent, state)
        return

    schema = _merge_single_branches(node)
    visitor(schema, parent, state)
    if id(node) in seen:
        return
    seen.add(id(node))

    for property_path, child in _children(schema):
        child_state = replace(
            state, depth=state.depth + 1, property_path=property_path, top=False
        )
        _walk(child, schema, child_state, visitor, seen=seen)


def _merge_single_branches(node: Mapping[str, Any]) -> Mapping[str, Any]:
    schema = node
    for keyword in COMBINATOR_KEYWORDS:
        branches = schema.get(keyword)
        if isinstance(branches, list) and len(branches) == 1 and isinstance(branches[0], Mapping):
            merged = {**branches[0], **schema}
            del merged[keyword]
            schema = merged
    return schema


def _children(schema: Mapping[str, Any]) -> list[tuple[str, Any]]:
    children: list[tuple[str, Any]] = []
    if "items" in schema:
        children.append(("items", schema["items"]))
    for keyword in ("additionalItems", "additionalProperties"):
        if isinstance(schema.get(keyword), Mapping):
            children.append((keyword, schema[keyword]))
    for keyword in ("properties", "patternProperties"):
        members = schema.get(keyword)
        if isinstance(members, Mapping):
            children.extend((f"{keyword}/{name}", child) for name, child in members.items())
    for keyword in COMBINATOR_KEYWORDS:
        branches = schema.get(keyword)
        if isinstance(branches, list):
            children.extend((f"{keyword}/{index}", child) for index, child in enumerate(branches))
    if isinstance(schema.get("not"), Mapping):
        children.append(("not", schema["not"]))
    return children
