"""Example payload synthesis with layered fallback."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from schema_tables.configuration.runtime_settings import ConversionSession, SamplerOptions

from .schema_cloning import circular_clone, json_roundtrip_clone
from .schema_sampler import SampleGenerator, SchemaSampler
from .value_sanitizing import strip_marker_keys, truncate_depth

logger = logging.getLogger("schema_tables.sample_synthesis")


class SampleSynthesizer:
    """Service producing example values for schema nodes.

    Generator failures never escape: each one is retried once against a
    cycle-free copy of the node and otherwise degrades to the copied node.
    Distinct failure messages are reported once per conversion session.
    """

    def __init__(
        self, session: ConversionSession, generator: SampleGenerator | None = None
    ) -> None:
        self._session = session
        self._generator = generator or SchemaSampler()

    def sample(
        self,
        node: Mapping[str, Any] | None,
        sampler_options: SamplerOptions | None = None,
        document: Mapping[str, Any] | None = None,
    ) -> Any:
        """Return the node's own example, or a synthesized, sanitized one."""
        if isinstance(node, Mapping) and node.get("example") is not None:
            return node["example"]
        if node is None:
            return {}
        options = sampler_options if sampler_options is not None else SamplerOptions()
        root = document if document is not None else self._session.document
        result = self._synthesize(node, options, root)
        return truncate_depth(strip_marker_keys(result), self._session.options.max_depth)

    def _synthesize(
        self, node: Mapping[str, Any], options: SamplerOptions, document: Mapping[str, Any]
    ) -> Any:
        clone = circular_clone(node)
        if not self._session.options.sample:
            return clone

        try:
            sample = self._generator.sample(clone, options, document)
            if isinstance(sample, Mapping) and "$ref" in sample:
                clone = json_roundtrip_clone(node)
                sample = self._generator.sample(clone, options, document)
            if isinstance(sample, Mapping) and not sample:
                envelope = {"type": "object", "properties": {"anonymous": clone}}
                wrapped = self._generator.sample(envelope, options, document)
                return wrapped.get("anonymous", {}) if isinstance(wrapped, Mapping) else wrapped
            return sample
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._report(exc, label="Sample generator failed")

        clone = json_roundtrip_clone(node)
        try:
            return self._generator.sample(clone, options, document)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._report(exc, label="Sample generator failed again")
        return clone

    def _report(self, exc: Exception, *, label: str) -> None:
        message = str(exc) or type(exc).__name__
        if self._session.error_memo().record(message):
            exc_info = exc if self._session.options.verbose else None
            logger.warning("%s: %s", label, message, exc_info=exc_info)
        else:
            logger.debug("Repeated sample generator error: %s", message)
