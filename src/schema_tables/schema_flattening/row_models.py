"""Flattened schema table entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Row:  # pylint: disable=too-many-instance-attributes
    """One renderable entry describing a single schema node."""

    name: str
    display_name: str
    type: str
    safe_type: str
    depth: int
    required: bool
    schema: Mapping[str, Any]
    format: str | None = None
    description: str | None = None
    restrictions: str | None = None
    reference: str | None = None

    def to_mapping(self) -> dict[str, Any]:
        """Return the row as plain data, without the source schema node."""
        return {
            "name": self.name,
            "displayName": self.display_name,
            "type": self.type,
            "safeType": self.safe_type,
            "format": self.format,
            "description": self.description,
            "required": self.required,
            "restrictions": self.restrictions,
            "depth": self.depth,
            "reference": self.reference,
        }


@dataclass
class Block:
    """Titled group of rows for one schema scope or one combinator branch."""

    title: str
    rows: list[Row] = field(default_factory=list)
    description: str | None = None
    external_docs: Mapping[str, Any] | None = None

    def to_mapping(self) -> dict[str, Any]:
        """Return the block as plain data."""
        mapping: dict[str, Any] = {
            "title": self.title,
            "rows": [row.to_mapping() for row in self.rows],
        }
        if self.description is not None:
            mapping["description"] = self.description
        if self.external_docs is not None:
            mapping["externalDocs"] = dict(self.external_docs)
        return mapping
