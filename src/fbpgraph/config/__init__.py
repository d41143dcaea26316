# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser settings and their YAML loader."""

from fbpgraph.config.settings import ParserSettings, SettingsError, load_settings, parse_settings

__all__ = [
    "ParserSettings",
    "SettingsError",
    "load_settings",
    "parse_settings",
]
