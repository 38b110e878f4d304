"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import Configuration, ConversionOptions, SamplerOptions, Translations

_OPTION_FLAGS = ("sample", "shallow_schemas", "trim", "join", "truncate", "verbose")
_TRANSLATION_KEYS = ("continued", "anonymous", "indent", "read_only", "write_only")
_SAMPLER_FLAGS = ("skip_read_only", "skip_write_only", "skip_non_required")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def default_configuration() -> Configuration:
    """Return the configuration used when no file is supplied."""
    return Configuration(
        path=None,
        options=ConversionOptions(),
        translations=Translations(),
        sampler=SamplerOptions(),
    )


def load_configuration(config_path: Path | str | None) -> Configuration:
    """Load and validate the configuration file."""
    if config_path is None:
        return default_configuration()

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    unknown_sections = sorted(set(parsed) - {"options", "translations", "sampler"})
    if unknown_sections:
        raise ConfigurationError(f"Unknown configuration sections: {', '.join(unknown_sections)}")

    return Configuration(
        path=path,
        options=_parse_options_section(parsed.get("options")),
        translations=_parse_translations_section(parsed.get("translations")),
        sampler=_parse_sampler_section(parsed.get("sampler")),
    )


def _parse_options_section(value: Any) -> ConversionOptions:
    section = _optional_mapping(value, "options")
    defaults = ConversionOptions()
    _reject_unknown_keys(section, (*_OPTION_FLAGS, "max_depth"), "options")
    flags = {
        name: _optional_bool(section.get(name), f"options.{name}", getattr(defaults, name))
        for name in _OPTION_FLAGS
    }
    max_depth = _optional_int(section.get("max_depth"), "options.max_depth", defaults.max_depth)
    return ConversionOptions(max_depth=max_depth, **flags)


def _parse_translations_section(value: Any) -> Translations:
    section = _optional_mapping(value, "translations")
    defaults = Translations()
    _reject_unknown_keys(section, _TRANSLATION_KEYS, "translations")
    strings = {}
    for name in _TRANSLATION_KEYS:
        raw = section.get(name)
        if raw is None:
            strings[name] = getattr(defaults, name)
            continue
        if not isinstance(raw, str):
            raise ConfigurationError(f"translations.{name} must be a string.")
        strings[name] = raw
    return Translations(**strings)


def _parse_sampler_section(value: Any) -> SamplerOptions:
    section = _optional_mapping(value, "sampler")
    defaults = SamplerOptions()
    _reject_unknown_keys(section, _SAMPLER_FLAGS, "sampler")
    flags = {
        name: _optional_bool(section.get(name), f"sampler.{name}", getattr(defaults, name))
        for name in _SAMPLER_FLAGS
    }
    return SamplerOptions(**flags)


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _reject_unknown_keys(
    section: Mapping[str, Any], allowed: tuple[str, ...], section_name: str
) -> None:
    unknown = sorted(str(key) for key in section if key not in allowed)
    if unknown:
        raise ConfigurationError(f"Unknown keys in '{section_name}': {', '.join(unknown)}")


def _optional_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _optional_int(value: Any, field_name: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    return value
