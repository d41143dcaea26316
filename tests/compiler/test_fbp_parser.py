# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""End-to-end tests for parsing FBP source text into graphs."""

import pytest

import fbpgraph
from fbpgraph.compiler.grammar import RuleTag
from fbpgraph.compiler.parser import FbpParser, parse
from fbpgraph.config.settings import ParserSettings
from fbpgraph.model.entities import Endpoint
from fbpgraph.parser.diagnostics import ParseError

# ###############
# Test Graphs
# ###############

GRAPH_IIP = """
\t'5s'
\t"""

GRAPH_TICK_LOGGER = """
\t'5s' -> INTERVAL Ticker(core/ticker) OUT -> IN Forward(core/passthru)
\tForward OUT -> IN Log(core/console)
\t"""

GRAPH_ONE_LINER = """
\tDemo OUT -> IN Process RESULT -> INPUT Visualize DISPLAY -> IN Console LOG -> IN D1
\tConsole ERR -> IN D2
\t"""

GRAPH_DEMO = """
\t'somefile.txt' -> SOURCE Read(ReadFile:main)
\tRead() OUT -> IN Split(SplitStr:main)
\tSplit() OUT -> IN Count(Counter:main)
\tCount() COUNT -> IN Display(Output:main)
\tRead() ERROR -> IN Display()
\t"""

GRAPH_EXPORTED_PORTS = """
\tINPORT=Read.IN:FILENAME
\tINPORT=Read.OPTIONS:CONFIG
\tOUTPORT=Process.OUT:RESULT
\tRead(ReadFile) OUT -> IN Process(Output)
\t"""


def _chain(hops: int) -> str:
    """Return one line linking ``A`` through *hops* middle processes to ``Z``."""
    return "A OUT -> " + " -> ".join(f"IN N{i} OUT" for i in range(hops)) + " -> IN Z\n"


# ###############
# Reference Graphs
# ###############


class TestReferenceGraphs:
    def test_lone_iip_yields_empty_graph(self) -> None:
        graph = parse(GRAPH_IIP)
        assert graph.processes == []
        assert graph.connections == []

    def test_tick_logger(self) -> None:
        graph = parse(GRAPH_TICK_LOGGER)
        assert graph.process_names() == ["Ticker", "Forward", "Log"]
        assert [str(c) for c in graph.connections] == [
            "('5s' -> (Ticker, INTERVAL))",
            "((Ticker, OUT) -> (Forward, IN))",
            "((Forward, OUT) -> (Log, IN))",
        ]

    def test_one_liner(self) -> None:
        graph = parse(GRAPH_ONE_LINER)
        assert graph.processes == []
        assert len(graph.connections) == 5
        assert graph.connections[-1].source == Endpoint(process="Console", port="ERR")
        assert graph.connections[-1].target == Endpoint(process="D2", port="IN")

    def test_demo(self) -> None:
        graph = parse(GRAPH_DEMO)
        assert graph.process_names() == ["Read", "Split", "Count", "Display"]
        assert [p.component for p in graph.processes] == ["ReadFile", "SplitStr", "Counter", "Output"]
        assert all(p.metadata == {"main": ""} for p in graph.processes)
        assert len(graph.connections) == 5
        assert graph.connections[0].data == "somefile.txt"
        assert str(graph.connections[4]) == "((Read, ERROR) -> (Display, IN))"

    def test_exported_ports(self) -> None:
        graph = parse(GRAPH_EXPORTED_PORTS)
        assert graph.process_names() == ["Read", "Process"]
        assert len(graph.connections) == 1
        assert graph.inports == {
            "FILENAME": Endpoint(process="Read", port="IN"),
            "CONFIG": Endpoint(process="Read", port="OPTIONS"),
        }
        assert graph.outports == {"RESULT": Endpoint(process="Process", port="OUT")}

    def test_empty_source(self) -> None:
        graph = parse("")
        assert graph.processes == []
        assert graph.connections == []
        assert graph.inports == {}
        assert graph.outports == {}

    def test_package_level_parse(self) -> None:
        assert fbpgraph.parse(GRAPH_TICK_LOGGER) == parse(GRAPH_TICK_LOGGER)


# ###############
# Subgraphs
# ###############


class TestSubgraphParsing:
    def test_prefix_from_argument(self) -> None:
        graph = parse(GRAPH_TICK_LOGGER, subgraph="Clock")
        assert graph.process_names() == ["Clock_Ticker", "Clock_Forward", "Clock_Log"]
        assert graph.connections[0].target == Endpoint(process="Clock_Ticker", port="INTERVAL")

    def test_prefix_from_settings(self) -> None:
        graph = parse(GRAPH_EXPORTED_PORTS, settings=ParserSettings(subgraph="io"))
        assert graph.subgraph == "io"
        assert graph.inports["FILENAME"] == Endpoint(process="io_Read", port="IN")

    def test_argument_overrides_settings(self) -> None:
        graph = parse(GRAPH_EXPORTED_PORTS, subgraph="", settings=ParserSettings(subgraph="io"))
        assert graph.process_names() == ["Read", "Process"]


# ###############
# Syntax Errors
# ###############


class TestSyntaxErrors:
    @pytest.mark.parametrize(
        "source",
        ["A OUT ->", "a -> b", "A(Foo OUT -> IN B", "'unterminated -> IN B"],
    )
    def test_invalid_source_raises(self, source: str) -> None:
        with pytest.raises(ParseError):
            parse(source)

    def test_diagnostics_for_unknown_character(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("?")
        error = exc_info.value
        assert [d.rule for d in error.diagnostics] == ["_"]
        assert (error.line, error.column) == (1, 1)

    def test_diagnostics_point_at_failing_line(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("A OUT -> IN B\n?")
        error = exc_info.value
        shallowest = error.diagnostics[-1]
        assert shallowest.rule == "_"
        assert (shallowest.begin_line, shallowest.begin_column) == (2, 1)
        assert (error.line, error.column) == (2, 1)

    def test_location_after_several_valid_lines(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("A OUT -> IN B\nC OUT -> IN D\n?")
        error = exc_info.value
        assert (error.line, error.column) == (3, 1)
        assert error.diagnostics[-1].rule == "_"
        assert error.diagnostics[-1].begin_line == 3

    def test_parse_error_is_exported_at_top_level(self) -> None:
        assert fbpgraph.ParseError is ParseError


# ###############
# Parser Object
# ###############


class TestFbpParser:
    def test_reparse_gives_same_graph(self) -> None:
        parser = FbpParser(GRAPH_DEMO)
        first = parser.parse()
        count = len(parser.records)
        second = parser.parse()
        assert first == second
        assert len(parser.records) == count

    def test_records_end_with_start_rule(self) -> None:
        parser = FbpParser(GRAPH_TICK_LOGGER)
        parser.parse()
        last = parser.records[-1]
        assert last.tag == RuleTag.START
        assert (last.begin, last.end) == (0, len(GRAPH_TICK_LOGGER))

    def test_reset_clears_records(self) -> None:
        parser = FbpParser(GRAPH_TICK_LOGGER)
        parser.parse()
        parser.reset()
        assert parser.records == []

    def test_small_initial_capacity_grows(self) -> None:
        small = FbpParser(GRAPH_DEMO, settings=ParserSettings(initial_capacity=1))
        assert small.parse() == FbpParser(GRAPH_DEMO).parse()

    def test_source_length_limit(self) -> None:
        parser = FbpParser("A OUT -> IN B", settings=ParserSettings(max_source_length=5))
        with pytest.raises(ValueError, match="exceeds the limit"):
            parser.parse()

    def test_source_within_limit(self) -> None:
        parser = FbpParser("A OUT -> IN B", settings=ParserSettings(max_source_length=13))
        assert len(parser.parse().connections) == 1

    def test_long_chain(self) -> None:
        graph = parse(_chain(100))
        assert len(graph.connections) == 101
        assert str(graph.connections[-1]) == "((N99, OUT) -> (Z, IN))"

    def test_chain_beyond_nesting_limit(self) -> None:
        parser = FbpParser(_chain(2000))
        with pytest.raises(ValueError, match="nests too deeply"):
            parser.parse()
        assert parser.records == []


class TestTrailingBlank:
    def test_blank_after_last_node_turns_it_into_a_leftlet(self) -> None:
        """``IN B `` reads as node ``IN`` with port ``B``, so the link has no target."""
        assert parse("A OUT -> IN B \n").connections == []

    def test_without_trailing_blank(self) -> None:
        assert len(parse("A OUT -> IN B\n").connections) == 1


class TestSyntaxTree:
    def test_root_spans_source(self) -> None:
        parser = FbpParser(GRAPH_TICK_LOGGER)
        parser.parse()
        root = parser.syntax_tree()
        assert root.tag == RuleTag.START
        assert (root.begin, root.end) == (0, len(GRAPH_TICK_LOGGER))
        assert len(root.find_all(RuleTag.LINE)) == 3

    def test_nodes_in_source_order(self) -> None:
        parser = FbpParser(GRAPH_TICK_LOGGER)
        parser.parse()
        nodes = [node.text(parser.source) for node in parser.syntax_tree().find_all(RuleTag.NODE)]
        assert nodes == ["Ticker(core/ticker)", "Forward(core/passthru)", "Forward", "Log(core/console)"]

    def test_empty_source_tree(self) -> None:
        parser = FbpParser("")
        parser.parse()
        root = parser.syntax_tree()
        assert root.tag == RuleTag.START
        assert root.children == []

    def test_requires_successful_parse(self) -> None:
        parser = FbpParser("?")
        with pytest.raises(RuntimeError):
            parser.syntax_tree()
        with pytest.raises(ParseError):
            parser.parse()
        with pytest.raises(RuntimeError):
            parser.syntax_tree()


class TestParserValidation:
    def test_reference_graphs_are_clean(self) -> None:
        for source in (GRAPH_TICK_LOGGER, GRAPH_DEMO, GRAPH_EXPORTED_PORTS):
            parser = FbpParser(source)
            parser.parse()
            result = parser.validate()
            assert result.warnings == []
            assert not result.has_errors

    def test_undeclared_processes_are_reported(self) -> None:
        parser = FbpParser(GRAPH_ONE_LINER)
        parser.parse()
        result = parser.validate()
        assert len(result.warnings) == 6
        assert result.warnings[0].message.startswith("Process 'Demo' used by connection")
        assert not result.has_errors

    def test_isolated_process_is_reported(self) -> None:
        parser = FbpParser("IN B(Comp)")
        parser.parse()
        messages = [w.message for w in parser.validate().warnings]
        assert messages == ["Process 'B' is not connected (isolated)."]

    def test_requires_successful_parse(self) -> None:
        with pytest.raises(RuntimeError):
            FbpParser(GRAPH_DEMO).validate()
