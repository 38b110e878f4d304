"""Sample synthesis service tests."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import pytest
from schema_tables.configuration.runtime_settings import (
    ConversionOptions,
    ConversionSession,
    SamplerOptions,
)
from schema_tables.sample_synthesis.sample_synthesizer import SampleSynthesizer

_LOGGER_NAME = "schema_tables.sample_synthesis"


class _ScriptedGenerator:
    """Generator returning (or raising) scripted outcomes in call order."""

    def __init__(self, *outcomes: Any) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[Mapping[str, Any]] = []

    def sample(
        self, schema: Mapping[str, Any], options: SamplerOptions, document: Mapping[str, Any]
    ) -> Any:
        self.calls.append(schema)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _session(**option_overrides: Any) -> ConversionSession:
    return ConversionSession(options=ConversionOptions(**option_overrides))


def test_existing_example_is_returned_without_synthesis() -> None:
    generator = _ScriptedGenerator(RuntimeError("must not be called"))
    node = {"type": "object", "example": {"id": 7}}

    enabled = SampleSynthesizer(_session(), generator).sample(node)
    disabled = SampleSynthesizer(_session(sample=False), generator).sample(node)

    assert enabled == {"id": 7}
    assert disabled == {"id": 7}
    assert generator.calls == []


def test_generator_result_is_returned_for_regular_schema() -> None:
    generator = _ScriptedGenerator({"id": 1})

    result = SampleSynthesizer(_session(), generator).sample({"type": "object"})

    assert result == {"id": 1}
    assert len(generator.calls) == 1


def test_generator_receives_document_and_sampler_options() -> None:
    received: list[tuple[SamplerOptions, Mapping[str, Any]]] = []

    class _RecordingGenerator:
        def sample(
            self, schema: Mapping[str, Any], options: SamplerOptions, document: Mapping[str, Any]
        ) -> Any:
            received.append((options, document))
            return "value"

    session = ConversionSession(document={"openapi": "3.0.3"})
    options = SamplerOptions(skip_read_only=True)

    SampleSynthesizer(session, _RecordingGenerator()).sample({"type": "string"}, options)
    SampleSynthesizer(session, _RecordingGenerator()).sample(
        {"type": "string"}, options, {"openapi": "3.1.0"}
    )

    assert received == [(options, {"openapi": "3.0.3"}), (options, {"openapi": "3.1.0"})]


def test_unresolved_reference_result_is_retried_with_json_copy() -> None:
    generator = _ScriptedGenerator({"$ref": "#/components/schemas/Pet"}, {"id": 1})
    node = {"type": "object", "properties": {"id": {"type": "integer"}}}

    result = SampleSynthesizer(_session(), generator).sample(node)

    assert result == {"id": 1}
    assert len(generator.calls) == 2
    assert generator.calls[1] == node
    assert generator.calls[1] is not node


def test_empty_object_result_is_resampled_through_envelope() -> None:
    generator = _ScriptedGenerator({}, {"anonymous": "wrapped"})
    node = {"description": "untyped"}

    result = SampleSynthesizer(_session(), generator).sample(node)

    assert result == "wrapped"
    assert generator.calls[1] == {
        "type": "object",
        "properties": {"anonymous": {"description": "untyped"}},
    }


def test_failure_is_retried_once_with_json_copy() -> None:
    generator = _ScriptedGenerator(RuntimeError("cycle"), {"ok": True})

    result = SampleSynthesizer(_session(), generator).sample({"type": "object"})

    assert result == {"ok": True}
    assert len(generator.calls) == 2


def test_repeated_failures_degrade_to_cloned_node() -> None:
    generator = _ScriptedGenerator(RuntimeError("boom"))
    node = {
        "type": "object",
        "x-schema-tables-oldRef": "#/components/schemas/Pet",
        "properties": {"id": {"type": "integer"}},
    }

    result = SampleSynthesizer(_session(), generator).sample(node)

    assert result == {"type": "object", "properties": {"id": {"type": "integer"}}}
    assert "x-schema-tables-oldRef" in node


def test_one_warning_per_distinct_message_per_session(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger=_LOGGER_NAME)
    session = _session()
    synthesizer = SampleSynthesizer(session, _ScriptedGenerator(RuntimeError("boom")))

    for _ in range(3):
        assert synthesizer.sample({"type": "object"}) is not None
    SampleSynthesizer(session, _ScriptedGenerator(ValueError("other"))).sample({"type": "string"})

    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    repeats = [record for record in caplog.records if record.levelno == logging.DEBUG]
    assert [record.getMessage() for record in warnings] == [
        "Sample generator failed: boom",
        "Sample generator failed: other",
    ]
    assert len(repeats) == 6
    assert session.sampler_errors is not None
    assert len(session.sampler_errors) == 2


def test_error_memo_is_not_shared_between_sessions(caplog: pytest.LogCaptureFixture) -> None:
    generator = _ScriptedGenerator(RuntimeError("boom"))

    SampleSynthesizer(_session(), generator).sample({"type": "object"})
    SampleSynthesizer(_session(), generator).sample({"type": "object"})

    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 2


def test_error_memo_is_created_lazily() -> None:
    session = _session()

    SampleSynthesizer(session, _ScriptedGenerator("fine")).sample({"type": "string"})
    assert session.sampler_errors is None

    SampleSynthesizer(session, _ScriptedGenerator(RuntimeError("boom"))).sample({"type": "string"})
    assert session.sampler_errors is not None
    assert "boom" in session.sampler_errors


def test_verbose_mode_attaches_traceback(caplog: pytest.LogCaptureFixture) -> None:
    generator = _ScriptedGenerator(RuntimeError("boom"))

    SampleSynthesizer(_session(verbose=True), generator).sample({"type": "object"})

    warning = next(record for record in caplog.records if record.levelno == logging.WARNING)
    assert warning.exc_info is not None


def test_quiet_mode_reports_message_only(caplog: pytest.LogCaptureFixture) -> None:
    generator = _ScriptedGenerator(RuntimeError("boom"))

    SampleSynthesizer(_session(), generator).sample({"type": "object"})

    warning = next(record for record in caplog.records if record.levelno == logging.WARNING)
    assert warning.exc_info is None


def test_disabled_sampling_returns_sanitized_copy() -> None:
    generator = _ScriptedGenerator(RuntimeError("must not be called"))
    node = {"type": "string", "x-schema-tables-oldRef": "#/components/schemas/Name"}

    result = SampleSynthesizer(_session(sample=False), generator).sample(node)

    assert result == {"type": "string"}
    assert generator.calls == []


def test_result_is_stripped_and_depth_limited() -> None:
    generator = _ScriptedGenerator(
        {"a": {"b": {"c": 1}}, "x-schema-tables-oldRef": "#/components/schemas/A"}
    )

    result = SampleSynthesizer(_session(max_depth=1), generator).sample({"type": "object"})

    assert result == {"a": {"b": {}}}


def test_cyclic_node_is_cloned_before_synthesis() -> None:
    node: dict[str, Any] = {"type": "object", "properties": {}}
    node["properties"]["self"] = node
    generator = _ScriptedGenerator({"self": None})

    SampleSynthesizer(_session(), generator).sample(node)

    assert generator.calls[0] == {"type": "object", "properties": {"self": {}}}


def test_missing_node_yields_empty_object() -> None:
    assert SampleSynthesizer(_session(), _ScriptedGenerator("unused")).sample(None) == {}


def test_envelope_without_anonymous_member_yields_empty_object() -> None:
    generator = _ScriptedGenerator({}, {})

    result = SampleSynthesizer(_session(), generator).sample({"description": "untyped"})

    assert result == {}


def test_skipped_read_only_object_yields_empty_object() -> None:
    node = {"type": "object", "readOnly": True}

    result = SampleSynthesizer(_session()).sample(node, SamplerOptions(skip_read_only=True))

    assert result == {}
