"""Sample synthesis exports."""

from .sample_synthesizer import SampleSynthesizer
from .schema_cloning import circular_clone, json_roundtrip_clone
from .schema_sampler import SampleGenerator, SamplerError, SchemaSampler
from .value_sanitizing import strip_marker_keys, truncate_depth

__all__ = [
    "SampleGenerator",
    "SampleSynthesizer",
    "SamplerError",
    "SchemaSampler",
    "circular_clone",
    "json_roundtrip_clone",
    "strip_marker_keys",
    "truncate_depth",
]
