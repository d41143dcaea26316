# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parse entry point for FBP graph notation.

Parsing runs in two passes: the grammar matches the whole input and leaves a
log of completed matches, then the log is replayed once through a
:class:`~fbpgraph.compiler.builder.GraphBuilder` to produce the
:class:`~fbpgraph.model.entities.Graph`.
"""

from __future__ import annotations

import logging

from fbpgraph.compiler.builder import GraphBuilder
from fbpgraph.compiler.grammar import FBP_GRAMMAR
from fbpgraph.config.settings import ParserSettings
from fbpgraph.model.entities import Graph
from fbpgraph.parser.diagnostics import ParseError, diagnose
from fbpgraph.parser.engine import Cursor
from fbpgraph.parser.records import MatchRecord, MatchRecordStore
from fbpgraph.parser.tree import ParseNode, build_tree
from fbpgraph.validation.checks import ValidationResult, validate

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class FbpParser:
    """Parser for one FBP source text.

    An instance serves one parse at a time. :meth:`parse` may be called
    again; it resets the cursor first and builds a fresh graph.

    Args:
        source: FBP source text.
        subgraph: Name prefixed to every process; defaults to ``settings.subgraph``.
        settings: Parser settings; defaults to :class:`ParserSettings` defaults.
    """

    def __init__(
        self,
        source: str,
        subgraph: str | None = None,
        settings: ParserSettings | None = None,
    ) -> None:
        self.settings = settings if settings is not None else ParserSettings()
        self.source = source
        self.subgraph = subgraph if subgraph is not None else self.settings.subgraph
        self._cursor = Cursor(source, MatchRecordStore(self.settings.initial_capacity))
        self._graph: Graph | None = None

    @property
    def records(self) -> list[MatchRecord]:
        """Committed match records of the last parse, in completion order."""
        return list(self._cursor.store)

    def parse(self) -> Graph:
        """Parse the source text into a Graph.

        Raises:
            ValueError: If the source exceeds ``settings.max_source_length``
                or chains more arrows on one line than the interpreter's
                recursion limit allows.
            ParseError: If the source is syntactically invalid.
        """
        limit = self.settings.max_source_length
        if limit is not None and len(self.source) > limit:
            raise ValueError(f"Source of {len(self.source)} characters exceeds the limit of {limit}")

        self.reset()
        store = self._cursor.store
        try:
            matched = FBP_GRAMMAR.match(self._cursor)
        except RecursionError:
            logger.debug("Nesting limit reached at offset %d", self._cursor.position)
            self.reset()
            raise ValueError("Source nests too deeply to parse; split long connection chains across lines") from None
        if not matched:
            diagnostics = diagnose(self.source, store.written())
            logger.debug("Parse failed with %d diagnostic(s)", len(diagnostics))
            raise ParseError(diagnostics)

        store.trim()
        logger.debug("Matched %d characters into %d records", len(self.source), len(store))
        builder = GraphBuilder(self.source, self.subgraph).replay(store)
        self._graph = builder.build()
        logger.debug(
            "Built graph with %d processes and %d connections",
            len(self._graph.processes),
            len(self._graph.connections),
        )
        return self._graph

    def reset(self) -> None:
        """Discard the state of any previous parse."""
        self._cursor.reset()
        self._graph = None

    def syntax_tree(self) -> ParseNode:
        """Return the parse tree of the last successful parse.

        Raises:
            RuntimeError: If no parse has succeeded yet.
        """
        if self._graph is None:
            raise RuntimeError("syntax_tree() requires a successful parse()")
        return build_tree(self._cursor.store)

    def validate(self) -> ValidationResult:
        """Run the validation checks on the parsed graph.

        Raises:
            RuntimeError: If no parse has succeeded yet.
        """
        if self._graph is None:
            raise RuntimeError("validate() requires a successful parse()")
        return validate(self._graph)


def parse(source: str, subgraph: str | None = None, settings: ParserSettings | None = None) -> Graph:
    """Parse FBP source text into a Graph.

    Args:
        source: The full text of an FBP graph.
        subgraph: Name prefixed to every process name, for composite graphs.
        settings: Optional parser settings.

    Returns:
        A Graph instance representing the parsed network.

    Raises:
        ParseError: If the source is syntactically invalid.
        ValueError: If the source exceeds the configured length limit or
            nests too deeply to parse.
    """
    return FbpParser(source, subgraph=subgraph, settings=settings).parse()
