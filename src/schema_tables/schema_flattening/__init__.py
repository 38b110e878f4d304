"""Schema flattening exports."""

from .row_models import Block, Row
from .schema_flattener import flatten_schema
from .schema_walker import WalkState, walk_schema
from .type_inference import infer_type

__all__ = [
    "Block",
    "Row",
    "WalkState",
    "flatten_schema",
    "infer_type",
    "walk_schema",
]
