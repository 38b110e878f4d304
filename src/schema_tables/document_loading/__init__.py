"""Document loading exports."""

from .document_loader import DocumentError, load_api_document, select_schema
from .pointer_resolution import (
    MARKER_PREFIX,
    RESOLVED_REF_MARKER,
    reference_link,
    reference_name,
    resolve_pointer,
)

__all__ = [
    "DocumentError",
    "MARKER_PREFIX",
    "RESOLVED_REF_MARKER",
    "load_api_document",
    "reference_link",
    "reference_name",
    "resolve_pointer",
    "select_schema",
]
