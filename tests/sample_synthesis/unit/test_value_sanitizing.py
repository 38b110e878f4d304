"""Sanitizing and truncation tests."""

from __future__ import annotations

from typing import Any

from schema_tables.sample_synthesis.value_sanitizing import strip_marker_keys, truncate_depth


def test_strip_marker_keys_removes_nested_markers_without_mutating() -> None:
    value: dict[str, Any] = {
        "id": 1,
        "x-schema-tables-oldRef": "#/components/schemas/Pet",
        "tags": [{"name": "a", "x-schema-tables-note": True}],
        "x-custom": "kept",
    }

    result = strip_marker_keys(value)

    assert result == {"id": 1, "tags": [{"name": "a"}], "x-custom": "kept"}
    assert "x-schema-tables-oldRef" in value


def test_strip_marker_keys_passes_scalars_through() -> None:
    assert strip_marker_keys("text") == "text"
    assert strip_marker_keys(None) is None


def test_truncate_depth_empties_containers_at_limit() -> None:
    value = {"a": {"b": {"c": 1}}, "list": [[1, 2], 3], "flat": 2}

    assert truncate_depth(value, 1) == {"a": {"b": {}}, "list": [[], 3], "flat": 2}
    assert truncate_depth(value, 2) == value


def test_truncate_depth_disabled_for_non_positive_limits() -> None:
    value = {"a": {"b": {"c": 1}}}

    assert truncate_depth(value, 0) is value
    assert truncate_depth(value, -1) is value


def test_truncate_depth_handles_top_level_arrays() -> None:
    assert truncate_depth([{"a": {"b": 1}}], 1) == [{"a": {}}]
