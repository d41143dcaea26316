# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembly of the graph model from a replayed record log.

The builder is fed the committed records of a successful parse in completion
order. ``TEXT`` records update the current capture; action records read it
and drive a small state machine that threads the pending source endpoint
through connection chains::

    'data' -> IN A(Comp) OUT -> IN B OUT -> IN C
    ^iip      ^middlet           ^middlet    ^rightlet

Every other record is structural and ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fbpgraph.compiler.grammar import RuleTag
from fbpgraph.model.entities import Connection, Endpoint, Graph, Process, qualify
from fbpgraph.parser.records import MatchRecord

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class GraphBuilder:
    """Stateful consumer of FBP grammar records for a single parse.

    Args:
        source: The text the records refer to.
        subgraph: Optional name prefixed to every process name.
    """

    def __init__(self, source: str, subgraph: str = "") -> None:
        self._source = source
        self._subgraph = subgraph

        # Transient parse state
        self._text = ""
        self._iip: str | None = None
        self._port = ""
        self._index = ""
        self._in_port = ""
        self._out_port = ""
        self._node_name = ""
        self._component = ""
        self._metadata = ""
        self._pending_source: Endpoint | None = None

        # Results
        self._processes: list[Process] = []
        self._connections: list[Connection] = []
        self._inports: dict[str, Endpoint] = {}
        self._outports: dict[str, Endpoint] = {}

    def replay(self, records: Iterable[MatchRecord]) -> GraphBuilder:
        """Feed every record of *records* in order."""
        for record in records:
            self.feed(record)
        return self

    def feed(self, record: MatchRecord) -> None:
        """Apply a single record."""
        tag = record.tag
        if tag == RuleTag.TEXT:
            self._text = self._source[record.begin : record.end]
        elif tag == RuleTag.CREATE_INPORT:
            self._export(self._inports, "inport")
        elif tag == RuleTag.CREATE_OUTPORT:
            self._export(self._outports, "outport")
        elif tag == RuleTag.SAVE_IN_PORT:
            self._in_port = self._port
        elif tag == RuleTag.SAVE_OUT_PORT:
            self._out_port = self._port
        elif tag == RuleTag.CREATE_MIDDLET:
            self._create_middlet()
        elif tag == RuleTag.CREATE_LEFTLET:
            self._create_leftlet()
        elif tag == RuleTag.CREATE_RIGHTLET:
            self._create_rightlet()
        elif tag == RuleTag.SET_IIP:
            self._iip = self._text.replace("\\'", "'")
        elif tag == RuleTag.SET_NODE_NAME:
            self._node_name = self._text
        elif tag == RuleTag.CREATE_NODE:
            self._create_node()
        elif tag == RuleTag.SET_COMPONENT:
            self._component = self._text
        elif tag == RuleTag.SET_METADATA:
            self._metadata = self._text
        elif tag == RuleTag.SET_PORT:
            self._port = self._text
        elif tag == RuleTag.SET_PORT_INDEX:
            self._index = self._text

    def build(self) -> Graph:
        """Return the graph assembled so far."""
        return Graph(
            subgraph=self._subgraph,
            processes=list(self._processes),
            connections=list(self._connections),
            inports=dict(self._inports),
            outports=dict(self._outports),
        )

    # ------------------------------------------------------------------
    # Chain segments
    # ------------------------------------------------------------------

    def _create_leftlet(self) -> None:
        """``node PORT``: the start of a link becomes the pending source."""
        self._pending_source = Endpoint(process=qualify(self._node_name, self._subgraph), port=self._port)
        self._node_name = ""
        self._port = ""
        self._index = ""

    def _create_rightlet(self) -> None:
        """``PORT node``: the end of a link closes the pending connection."""
        self._connect(self._port)
        self._node_name = ""
        self._port = ""
        self._index = ""

    def _create_middlet(self) -> None:
        """``IN node OUT``: close the incoming link, then start the outgoing one."""
        self._connect(self._in_port)
        self._port = self._out_port
        self._in_port = ""
        self._out_port = ""
        self._create_leftlet()

    def _connect(self, port: str) -> None:
        target = Endpoint(process=qualify(self._node_name, self._subgraph), port=port)
        if self._pending_source is not None:
            self._add_connection(Connection(source=self._pending_source, target=target))
        elif self._iip is not None:
            self._add_connection(Connection(data=self._iip, target=target))
        else:
            logger.debug("No source or data for %s, skipping connection", target)
        self._pending_source = None
        self._iip = None

    def _add_connection(self, connection: Connection) -> None:
        logger.debug("Connection %s", connection)
        self._connections.append(connection)

    # ------------------------------------------------------------------
    # Processes
    # ------------------------------------------------------------------

    def _create_node(self) -> None:
        """Declare the current node if it names a component and is not known yet."""
        name = qualify(self._node_name, self._subgraph)
        if self._component and not self._process_exists(name):
            process = Process(
                name=name,
                component=self._component,
                metadata=_parse_metadata(self._metadata),
            )
            logger.debug("Process %s", process)
            self._processes.append(process)
        self._component = ""
        self._metadata = ""

    def _process_exists(self, name: str) -> bool:
        return any(process.name == name for process in self._processes)

    # ------------------------------------------------------------------
    # Exported ports
    # ------------------------------------------------------------------

    def _export(self, ports: dict[str, Endpoint], kind: str) -> None:
        parsed = _parse_exported_port(self._text)
        if parsed is None:
            logger.debug("Ignoring malformed %s declaration %r", kind, self._text)
            return
        name, process, port = parsed
        ports[name] = Endpoint(process=qualify(process, self._subgraph), port=port)
        logger.debug("Exported %s %s -> %s", kind, name, ports[name])


# ################
# Implementation
# ################


def _parse_metadata(text: str) -> dict[str, str]:
    """Parse ``key=value,key2=value2``; a key without ``=`` maps to ``""``."""
    metadata: dict[str, str] = {}
    if not text:
        return metadata
    for pair in text.split(","):
        key, _, value = pair.partition("=")
        metadata[key.strip()] = value.strip()
    return metadata


def _parse_exported_port(text: str) -> tuple[str, str, str] | None:
    """Split ``process.port:exported`` into its parts, or return None if malformed."""
    endpoint, separator, name = text.partition(":")
    if not separator or ":" in name:
        return None
    process, separator, port = endpoint.partition(".")
    if not separator or "." in port:
        return None
    return name.strip(), process.strip(), port.strip()
