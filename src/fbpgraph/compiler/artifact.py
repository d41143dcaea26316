# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of parsed graphs.

Graphs are stored as compact JSON in the layout FBP runtimes commonly read:
processes keyed by name, connections with ``src``/``data`` and ``tgt``, and
exported port maps. The format is versioned so future schema changes can be
detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fbpgraph.model.entities import Connection, Endpoint, Graph, Process

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".fbp.json"


def serialize(graph: Graph) -> str:
    """Serialize a Graph to a compact JSON string."""
    return json.dumps(_graph_to_dict(graph), separators=(",", ":"))


def deserialize(data: str) -> Graph:
    """Deserialize a Graph from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`Graph` model.

    Raises:
        ValueError: If the artifact format version is not recognised.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return _graph_from_dict(obj)


def write_artifact(graph: Graph, path: Path) -> None:
    """Write a graph artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(graph), encoding="utf-8")


def read_artifact(path: Path) -> Graph:
    """Read and deserialize a graph artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################


def _graph_to_dict(graph: Graph) -> dict[str, Any]:
    d: dict[str, Any] = {
        "v": ARTIFACT_FORMAT_VERSION,
        "processes": {p.name: _process_to_dict(p) for p in graph.processes},
        "connections": [_connection_to_dict(c) for c in graph.connections],
        "inports": {name: _endpoint_to_dict(e) for name, e in graph.inports.items()},
        "outports": {name: _endpoint_to_dict(e) for name, e in graph.outports.items()},
    }
    if graph.subgraph:
        d["subgraph"] = graph.subgraph
    return d


def _graph_from_dict(obj: dict[str, Any]) -> Graph:
    return Graph(
        subgraph=obj.get("subgraph", ""),
        processes=[_process_from_dict(name, p) for name, p in obj.get("processes", {}).items()],
        connections=[_connection_from_dict(c) for c in obj.get("connections", [])],
        inports={name: _endpoint_from_dict(e) for name, e in obj.get("inports", {}).items()},
        outports={name: _endpoint_from_dict(e) for name, e in obj.get("outports", {}).items()},
    )


def _process_to_dict(process: Process) -> dict[str, Any]:
    d: dict[str, Any] = {}
    if process.component is not None:
        d["component"] = process.component
    if process.metadata:
        d["metadata"] = process.metadata
    return d


def _process_from_dict(name: str, obj: dict[str, Any]) -> Process:
    return Process(
        name=name,
        component=obj.get("component"),
        metadata=obj.get("metadata", {}),
    )


def _endpoint_to_dict(endpoint: Endpoint) -> dict[str, Any]:
    return {"process": endpoint.process, "port": endpoint.port}


def _endpoint_from_dict(obj: dict[str, Any]) -> Endpoint:
    return Endpoint(process=obj["process"], port=obj["port"])


def _connection_to_dict(connection: Connection) -> dict[str, Any]:
    d: dict[str, Any] = {}
    if connection.source is not None:
        d["src"] = _endpoint_to_dict(connection.source)
    else:
        d["data"] = connection.data
    d["tgt"] = _endpoint_to_dict(connection.target)
    return d


def _connection_from_dict(obj: dict[str, Any]) -> Connection:
    source = obj.get("src")
    return Connection(
        source=_endpoint_from_dict(source) if source is not None else None,
        data=obj.get("data"),
        target=_endpoint_from_dict(obj["tgt"]),
    )
