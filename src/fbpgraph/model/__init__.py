# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Graph model for FBP networks (processes, connections, exported ports)."""

from fbpgraph.model.entities import Connection, Endpoint, Graph, Process, qualify

__all__ = [
    "Endpoint",
    "Process",
    "Connection",
    "Graph",
    "qualify",
]
