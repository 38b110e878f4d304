"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-tables.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Conversion configuration template for schema-tables.
# Every key is optional; remove a key to fall back to its default value.

options:
  # Synthesize example payloads (false returns the raw schema instead).
  sample: true
  # Nested arrays/objects at or beyond this depth are emptied (0 disables).
  max_depth: 10
  # Hide the nested rows of referenced schemas.
  shallow_schemas: false
  # Description formatting: strip whitespace, join lines, keep the first line.
  trim: false
  join: false
  truncate: false
  # Report sample generator failures with full tracebacks.
  verbose: false

translations:
  continued: "continued"
  anonymous: "anonymous"
  indent: "»"
  read_only: "read-only"
  write_only: "write-only"

sampler:
  skip_read_only: false
  skip_write_only: false
  skip_non_required: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with the default values and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
