# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for Flow-Based Programming graph notation."""

from fbpgraph.compiler import FbpParser, ParseError, parse
from fbpgraph.model import Connection, Endpoint, Graph, Process

__version__ = "0.1.0"

__all__ = [
    "parse",
    "FbpParser",
    "ParseError",
    "Graph",
    "Process",
    "Connection",
    "Endpoint",
]
