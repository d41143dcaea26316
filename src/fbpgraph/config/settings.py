# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for parser settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from fbpgraph.parser.records import DEFAULT_CAPACITY

# ###############
# Public Interface
# ###############


class SettingsError(Exception):
    """Raised when a settings file is invalid or cannot be loaded."""


@dataclass
class ParserSettings:
    """Options applied to every parse.

    Attributes:
        subgraph: Name prefixed to all process names, or ``""`` for a top-level graph.
        initial_capacity: Number of record slots allocated before the store starts doubling.
        max_source_length: Longest source text (in characters) accepted, or None for no limit.
    """

    subgraph: str = ""
    initial_capacity: int = DEFAULT_CAPACITY
    max_source_length: int | None = None


def load_settings(path: Path) -> ParserSettings:
    """Load and parse a parser settings file.

    Args:
        path: Path to a YAML settings file.

    Returns:
        A ParserSettings instance populated from the file.

    Raises:
        SettingsError: If the file cannot be read or the settings are invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SettingsError(f"Settings file not found: {path}") from None
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file: {exc}") from exc

    return parse_settings(text, source_label=str(path))


def parse_settings(text: str, source_label: str = "<string>") -> ParserSettings:
    """Parse settings YAML text into a ParserSettings.

    An empty document yields the defaults.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Raises:
        SettingsError: If the YAML is invalid, not a mapping, or holds unknown
            keys or values of the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ParserSettings()
    if not isinstance(data, dict):
        raise SettingsError(f"{source_label}: settings must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise SettingsError(f"{source_label}: unknown setting(s): {', '.join(unknown)}")

    settings = ParserSettings()
    if "subgraph" in data:
        subgraph = data["subgraph"]
        if not isinstance(subgraph, str):
            raise SettingsError(f"{source_label}: 'subgraph' must be a string")
        settings.subgraph = subgraph
    if "initial-capacity" in data:
        settings.initial_capacity = _positive_int(data, "initial-capacity", source_label)
    if data.get("max-source-length") is not None:
        settings.max_source_length = _positive_int(data, "max-source-length", source_label)
    return settings


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"subgraph", "initial-capacity", "max-source-length"})


def _positive_int(mapping: dict[str, object], key: str, source_label: str) -> int:
    """Extract a positive integer field, raising SettingsError otherwise."""
    value = mapping[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsError(f"{source_label}: '{key}' must be an integer")
    if value < 1:
        raise SettingsError(f"{source_label}: '{key}' must be positive")
    return value
