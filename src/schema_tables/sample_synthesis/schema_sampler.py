"""Default example generator for schema nodes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from schema_tables.configuration.runtime_settings import SamplerOptions
from schema_tables.document_loading.pointer_resolution import resolve_pointer
from schema_tables.schema_flattening.type_inference import infer_type

_STRING_FORMATS = {
    "date-time": "2019-08-24T14:15:22Z",
    "date": "2019-08-24",
    "time": "14:15:22Z",
    "email": "user@example.com",
    "uuid": "095be615-a8ad-4c33-8e9c-c7612fbf6c9f",
    "uri": "http://example.com",
    "url": "http://example.com",
    "hostname": "example.com",
    "ipv4": "192.168.0.1",
    "ipv6": "2001:0db8:85a3:0000:0000:8a2e:0370:7334",
    "byte": "c3RyaW5n",
    "binary": "string",
    "password": "pa$$word",
}


class SamplerError(Exception):
    """Raised when a schema cannot be turned into an example value."""


class SampleGenerator(Protocol):
    """Protocol implemented by example generators."""

    def sample(
        self, schema: Mapping[str, Any], options: SamplerOptions, document: Mapping[str, Any]
    ) -> Any: ...


class SchemaSampler:
    """Deterministic example generator resolving references against the document."""

    def sample(
        self, schema: Mapping[str, Any], options: SamplerOptions, document: Mapping[str, Any]
    ) -> Any:
        """Return an example value for a schema."""
        return _SamplingRun(options=options, document=document).sample(schema)


class _SamplingRun:
    """Reference stack and options for one SchemaSampler.sample call."""

    def __init__(self, *, options: SamplerOptions, document: Mapping[str, Any]) -> None:
        self._options = options
        self._document = document
        self._active_refs: list[str] = []

    def sample(self, schema: Any) -> Any:
        if isinstance(schema, bool):
            return None
        if not isinstance(schema, Mapping):
            raise SamplerError(f"Schema must be an object, got {type(schema).__name__}")

        for keyword in ("example", "default", "const"):
            if keyword in schema:
                return schema[keyword]
        enum_values = schema.get("enum")
        if isinstance(enum_values, list) and enum_values:
            return enum_values[0]

        if "$ref" in schema:
            return self._sample_reference(schema["$ref"])
        if isinstance(schema.get("allOf"), list):
            return self._sample_all_of(schema)
        for keyword in ("oneOf", "anyOf"):
            branches = schema.get(keyword)
            if isinstance(branches, list) and branches:
                siblings = {key: value for key, value in schema.items() if key != keyword}
                first = branches[0]
                return self.sample({**siblings, **first} if isinstance(first, Mapping) else first)

        schema_type = _effective_type(schema)
        if schema_type == "object":
            return self._sample_object(schema)
        if schema_type == "array":
            return self._sample_array(schema)
        if schema_type == "string":
            return _sample_string(schema)
        if schema_type in ("integer", "number"):
            return _sample_number(schema)
        if schema_type == "boolean":
            return True
        return None

    def _sample_reference(self, pointer: Any) -> Any:
        if not isinstance(pointer, str):
            raise SamplerError(f"Reference must be a string, got {pointer!r}")
        if pointer in self._active_refs:
            return {}
        target = resolve_pointer(self._document, pointer)
        if target is None:
            raise SamplerError(f"Could not resolve reference: {pointer}")
        self._active_refs.append(pointer)
        try:
            return self.sample(target)
        finally:
            self._active_refs.pop()

    def _sample_all_of(self, schema: Mapping[str, Any]) -> Any:
        merged: dict[str, Any] = {}
        for branch in schema["allOf"]:
            value = self.sample(branch)
            if not isinstance(value, Mapping):
                return value
            merged.update(value)
        rest = {key: value for key, value in schema.items() if key != "allOf"}
        if "properties" in rest or rest.get("type") == "object":
            merged.update(self._sample_object(rest))
        return merged

    def _sample_object(self, schema: Mapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        required = schema.get("required")
        required_names = required if isinstance(required, list) else []
        properties = schema.get("properties")
        if isinstance(properties, Mapping):
            for name, child in properties.items():
                if self._skips_property(name, child, required_names):
                    continue
                result[name] = self.sample(child)
        additional = schema.get("additionalProperties")
        if isinstance(additional, Mapping) and not result:
            result["property1"] = self.sample(additional)
            result["property2"] = self.sample(additional)
        return result

    def _skips_property(self, name: str, child: Any, required_names: list[str]) -> bool:
        if self._options.skip_non_required and name not in required_names:
            return True
        definition = child
        if isinstance(child, Mapping) and isinstance(child.get("$ref"), str):
            definition = resolve_pointer(self._document, child["$ref"]) or child
        if not isinstance(definition, Mapping):
            return False
        if self._options.skip_read_only and definition.get("readOnly"):
            return True
        return bool(self._options.skip_write_only and definition.get("writeOnly"))

    def _sample_array(self, schema: Mapping[str, Any]) -> list[Any]:
        items = schema.get("items")
        if not isinstance(items, Mapping):
            return []
        min_items = schema.get("minItems")
        count = max(min_items, 1) if isinstance(min_items, int) else 1
        return [self.sample(items) for _ in range(count)]


def _effective_type(schema: Mapping[str, Any]) -> str:
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        non_null = [item for item in schema_type if item != "null"]
        return str(non_null[0]) if non_null else "null"
    return infer_type(schema)


def _sample_string(schema: Mapping[str, Any]) -> str:
    value = _STRING_FORMATS.get(str(schema.get("format")), "string")
    min_length = schema.get("minLength")
    if isinstance(min_length, int) and len(value) < min_length:
        value = value + "a" * (min_length - len(value))
    max_length = schema.get("maxLength")
    if isinstance(max_length, int) and max_length >= 0:
        value = value[:max_length]
    return value


def _sample_number(schema: Mapping[str, Any]) -> int | float:
    minimum = schema.get("minimum")
    exclusive_minimum = schema.get("exclusiveMinimum")
    maximum = schema.get("maximum")
    if isinstance(exclusive_minimum, int | float) and not isinstance(exclusive_minimum, bool):
        return exclusive_minimum + 1
    if isinstance(minimum, int | float):
        return minimum + 1 if exclusive_minimum is True else minimum
    if isinstance(maximum, int | float) and maximum < 0:
        return maximum
    return 0
