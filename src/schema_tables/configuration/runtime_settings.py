"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class DescriptionFormatting:
    """Description post-processing flags applied to every flattened row."""

    trim: bool = False
    join: bool = False
    truncate: bool = False


@dataclass(frozen=True)
class ConversionOptions:  # pylint: disable=too-many-instance-attributes
    """Options recognized by the flattener and the sample synthesizer."""

    sample: bool = True
    max_depth: int = 10
    shallow_schemas: bool = False
    trim: bool = False
    join: bool = False
    truncate: bool = False
    verbose: bool = False

    @property
    def description_formatting(self) -> DescriptionFormatting:
        """Return the description flags as a standalone value."""
        return DescriptionFormatting(trim=self.trim, join=self.join, truncate=self.truncate)


@dataclass(frozen=True)
class Translations:
    """Caller-supplied display strings."""

    continued: str = "continued"
    anonymous: str = "anonymous"
    indent: str = "»"
    read_only: str = "read-only"
    write_only: str = "write-only"


@dataclass(frozen=True)
class SamplerOptions:
    """Options forwarded untouched to the sample generator."""

    skip_read_only: bool = False
    skip_write_only: bool = False
    skip_non_required: bool = False


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    options: ConversionOptions
    translations: Translations
    sampler: SamplerOptions


class ErrorMemo:
    """Distinct synthesis-error messages seen during one conversion run."""

    def __init__(self) -> None:
        self._messages: set[str] = set()

    def record(self, message: str) -> bool:
        """Remember a message and return True when it was not seen before."""
        if message in self._messages:
            return False
        self._messages.add(message)
        return True

    def __contains__(self, message: object) -> bool:
        return message in self._messages

    def __len__(self) -> int:
        return len(self._messages)


@dataclass
class ConversionSession:
    """Mutable state shared by every flatten and sample call of one run."""

    document: Mapping[str, Any] = field(default_factory=dict)
    options: ConversionOptions = field(default_factory=ConversionOptions)
    translations: Translations = field(default_factory=Translations)
    sampler_errors: ErrorMemo | None = None

    def error_memo(self) -> ErrorMemo:
        """Return the run's error memo, creating it on first use."""
        if self.sampler_errors is None:
            self.sampler_errors = ErrorMemo()
        return self.sampler_errors
