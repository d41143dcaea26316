# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Graph entities produced by the FBP parser."""

from __future__ import annotations

from pydantic import BaseModel, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


def qualify(name: str, subgraph: str = "") -> str:
    """Return *name* prefixed with the subgraph name, if there is one."""
    if subgraph:
        return f"{subgraph}_{name}"
    return name


class Endpoint(BaseModel):
    """One side of a connection: a port on a process."""

    process: str
    port: str

    def __str__(self) -> str:
        return f"({self.process}, {self.port})"


class Process(BaseModel):
    """A named node of the graph, bound to a component implementation."""

    name: str
    component: str | None = None
    metadata: dict[str, str] = _Field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.name}({self.component or ''})"


class Connection(BaseModel):
    """A directed edge into a target port.

    The packet either comes from another process (``source``) or is an
    initial information packet given literally in the graph (``data``).
    Exactly one of the two is set.
    """

    target: Endpoint
    source: Endpoint | None = None
    data: str | None = None

    @model_validator(mode="after")
    def _check_origin(self) -> Connection:
        if (self.source is None) == (self.data is None):
            raise ValueError("A connection needs exactly one of 'source' or 'data'")
        return self

    @property
    def is_iip(self) -> bool:
        """Return True if the connection injects literal data."""
        return self.data is not None

    def __str__(self) -> str:
        origin = repr(self.data) if self.source is None else str(self.source)
        return f"({origin} -> {self.target})"


class Graph(BaseModel):
    """Top-level model representing one parsed FBP graph.

    Attributes:
        subgraph: Name prefixed to every process when the graph was parsed
            as part of a composite, or ``""``.
        processes: Declared processes in declaration order.
        connections: Connections in the order they appear in the chains.
        inports: Exported inbound ports, keyed by their external name.
        outports: Exported outbound ports, keyed by their external name.
    """

    subgraph: str = ""
    processes: list[Process] = _Field(default_factory=list)
    connections: list[Connection] = _Field(default_factory=list)
    inports: dict[str, Endpoint] = _Field(default_factory=dict)
    outports: dict[str, Endpoint] = _Field(default_factory=dict)

    def get_process(self, name: str) -> Process | None:
        """Look up a process by its qualified name or by its name within the subgraph."""
        candidates = {name, qualify(name, self.subgraph)}
        for process in self.processes:
            if process.name in candidates:
                return process
        return None

    def process_names(self) -> list[str]:
        """Return the names of all declared processes in declaration order."""
        return [process.name for process in self.processes]
