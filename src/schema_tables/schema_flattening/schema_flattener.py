"""Schema flattening service.

Turns a schema tree into an ordered list of titled blocks, each holding the
depth-annotated rows an external renderer lays out as documentation tables.
Combinator branches (``allOf``/``anyOf``/``oneOf``/``not``) open blocks of their
own; rows resuming at the parent scope after a branch land in a "continued"
block.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from schema_tables.configuration.runtime_settings import ConversionSession, DescriptionFormatting
from schema_tables.document_loading.pointer_resolution import (
    MARKER_PREFIX,
    RESOLVED_REF_MARKER,
    reference_link,
    reference_name,
    resolve_pointer,
)

from .row_models import Block, Row
from .schema_walker import COMBINATOR_KEYWORDS, WalkState, walk_schema
from .type_inference import infer_type

logger = logging.getLogger("schema_tables.schema_flattening")

_BRANCH_TITLES = {"allOf": "and", "anyOf": "or", "oneOf": "xor"}
_ITEMS_COMBINATORS = ("anyOf", "allOf", "oneOf", "not")


def flatten_schema(
    schema: Mapping[str, Any] | None,
    offset: int = 0,
    options: DescriptionFormatting | None = None,
    context: ConversionSession | None = None,
) -> list[Block]:
    """Return the blocks of rows describing every named node of a schema.

    Args:
      schema: Schema node to flatten; never mutated.
      offset: Added to every row's indent level.
      options: Description formatting flags, defaulting to the session options.
      context: Conversion session providing the root document, options and
        translations.

    Returns:
      Blocks in discovery order; the first one describes the schema itself.
    """
    session = context if context is not None else ConversionSession()
    formatting = options if options is not None else session.options.description_formatting
    run = _FlatteningRun(offset=offset, formatting=formatting, session=session)
    run.start(schema)
    walk_schema(schema, run.visit)
    return run.blocks


class _FlatteningRun:  # pylint: disable=too-many-instance-attributes
    """Mutable bookkeeping for one flatten_schema call."""

    def __init__(
        self, *, offset: int, formatting: DescriptionFormatting, session: ConversionSession
    ) -> None:
        self._offset = offset
        self._formatting = formatting
        self._session = session
        self._translations = session.translations
        self.blocks: list[Block] = []
        self._block = Block(title="")
        self._block_depth = 0
        self._last_depth: int | None = None
        self._indent = 0
        self._skip_depth: int | None = None

    def start(self, schema: Mapping[str, Any] | None) -> None:
        if schema:
            self._block.title = schema.get("title") or schema.get("description") or ""
            self._block.description = schema.get("description")
            if schema.get("externalDocs"):
                self._block.external_docs = schema["externalDocs"]
        self.blocks.append(self._block)

    def visit(self, schema: Mapping[str, Any], parent: Mapping[str, Any], state: WalkState) -> None:
        is_branch = _is_combinator_slot(state.property_path)
        if is_branch:
            self._open_branch_block(schema, state)
        elif self._block_depth and state.depth < self._block_depth:
            self._push_block(Block(title=self._translations.continued))
            self._block_depth = 0

        name, top = self._derive_name(schema, parent, state, is_branch)
        reference = _reference_pointer(schema)
        row_type = "$ref" if isinstance(schema.get("$ref"), str) else infer_type(schema)
        suppressed = self._in_shallow_window(state.depth)

        if name and not suppressed and (not top or row_type != "object"):
            self._track_depth(state.depth)
        depth = max(self._indent + self._offset, 0)

        if suppressed or (name and name.startswith(MARKER_PREFIX)):
            return
        if not name:
            if state.property_path == "items":
                logger.debug("Folding items schema into its array row at depth %s", state.depth)
            elif not state.top:
                logger.warning("Omitting unnamed schema node at %s", state.property_path)
            return

        if top and row_type == "object":
            return
        if reference is not None and self._session.options.shallow_schemas:
            self._skip_depth = state.depth

        self._block.rows.append(
            self._build_row(schema, parent, name=name, row_type=row_type, depth=depth)
        )

    def _build_row(
        self,
        schema: Mapping[str, Any],
        parent: Mapping[str, Any],
        *,
        name: str,
        row_type: str,
        depth: int,
    ) -> Row:
        description = schema.get("description")
        safe_type = row_type
        reference = _reference_pointer(schema)
        if reference is not None:
            safe_type = reference_link(reference)
            if not description:
                description = self._target_description(reference)

        schema_format = schema.get("format")
        if schema_format:
            safe_type = f"{safe_type}({schema_format})"

        items = schema.get("items")
        if row_type == "array" and isinstance(items, Mapping):
            items_type, items_description = self._items_type(items)
            safe_type = f"[{items_type}]"
            if not description and items_description:
                description = f"[{items_description}]"

        if schema.get("nullable") is True:
            safe_type += "|null"

        restrictions = None
        if schema.get("readOnly"):
            restrictions = self._translations.read_only
        if schema.get("writeOnly"):
            restrictions = self._translations.write_only

        required_names = parent.get("required")
        required = isinstance(required_names, list) and name in required_names

        indent = self._translations.indent * depth
        return Row(
            name=name,
            display_name=f"{indent} {name}".strip(),
            type=row_type,
            safe_type=safe_type,
            depth=depth,
            required=required,
            schema=schema,
            format=schema_format,
            description=self._format_description(description),
            restrictions=restrictions,
            reference=reference_name(reference) if reference is not None else None,
        )

    def _open_branch_block(self, schema: Mapping[str, Any], state: WalkState) -> None:
        keyword, _, index = (state.property_path or "").partition("/")
        title = keyword if index in ("", "0") else _BRANCH_TITLES.get(keyword, keyword)

        target: Any = schema
        prefix = ""
        reference = _reference_pointer(schema)
        if reference is not None:
            prefix = f"{reference_name(reference)}."
            if isinstance(schema.get("$ref"), str):
                target = resolve_pointer(self._session.document, reference)
        if isinstance(target, Mapping) and isinstance(target.get("discriminator"), Mapping):
            property_name = target["discriminator"].get("propertyName")
            if property_name:
                title += f" - discriminator: {prefix}{property_name}"

        self._push_block(Block(title=title))
        self._block_depth = state.depth

    def _push_block(self, block: Block) -> None:
        self._block = block
        self.blocks.append(block)

    def _derive_name(
        self,
        schema: Mapping[str, Any],
        parent: Mapping[str, Any],
        state: WalkState,
        is_branch: bool,
    ) -> tuple[str, bool]:
        anonymous = f"*{self._translations.anonymous}*"
        name = ""
        if is_branch:
            name = anonymous
        elif state.segment is not None:
            name = state.segment
        if not name and schema.get("title"):
            name = str(schema["title"])

        top = state.top
        schema_type = schema.get("type")
        items = schema.get("items")
        if not name and schema_type == "array" and _reference_pointer(items) is not None:
            top = False
        elif not name and top and schema_type and schema_type not in ("object", "array"):
            top = False

        if not top and not name:
            if state.property_path in ("additionalProperties", "additionalItems"):
                name = f"**{state.property_path}**"
            elif (state.property_path or "").startswith("patternProperties/"):
                name = f"*{state.segment}*"
            elif not parent.get("items"):
                name = anonymous
        return name, top

    def _in_shallow_window(self, depth: int) -> bool:
        if self._skip_depth is None:
            return False
        if depth > self._skip_depth:
            return True
        self._skip_depth = None
        return False

    def _track_depth(self, depth: int) -> None:
        if self._last_depth is not None:
            if depth > self._last_depth:
                self._indent += 1
            elif depth < self._last_depth:
                self._indent = max(self._indent - 1, 0)
        self._last_depth = depth

    def _items_type(self, items: Mapping[str, Any]) -> tuple[str, str | None]:
        items_type = items.get("type") or "any"
        items_description = None
        reference = _reference_pointer(items)
        if reference is not None:
            items_type = reference_link(reference)
            items_description = self._target_description(reference)
        for keyword in _ITEMS_COMBINATORS:
            if items.get(keyword):
                items_type = keyword
        return str(items_type), items_description

    def _target_description(self, pointer: str) -> str | None:
        target = resolve_pointer(self._session.document, pointer)
        if isinstance(target, Mapping) and target.get("description"):
            return str(target["description"])
        return None

    def _format_description(self, description: Any) -> str | None:
        if not isinstance(description, str):
            return description
        if self._formatting.trim:
            description = description.strip()
        if self._formatting.join:
            description = description.replace("\r", "").replace("\n", " ")
        if self._formatting.truncate:
            description = description.replace("\r", "").split("\n")[0]
        if description == "undefined":
            return ""
        return description


def _is_combinator_slot(property_path: str | None) -> bool:
    if not property_path:
        return False
    return property_path == "not" or property_path.split("/")[0] in COMBINATOR_KEYWORDS


def _reference_pointer(schema: Any) -> str | None:
    """Return the raw or pre-resolved reference pointer a node carries."""
    if not isinstance(schema, Mapping):
        return None
    raw_ref = schema.get("$ref")
    if isinstance(raw_ref, str):
        return raw_ref
    marker = schema.get(RESOLVED_REF_MARKER)
    if isinstance(marker, str):
        return marker
    return None
