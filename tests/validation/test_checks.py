# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the FBP graph validation checks."""

from fbpgraph.model.entities import Connection, Endpoint, Graph, Process
from fbpgraph.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

# ###############
# Test Helpers
# ###############


def _ep(process: str, port: str = "IN") -> Endpoint:
    """Create an Endpoint."""
    return Endpoint(process=process, port=port)


def _link(source: str, target: str) -> Connection:
    """Create a Connection between two processes."""
    return Connection(source=_ep(source, "OUT"), target=_ep(target))


def _proc(name: str) -> Process:
    return Process(name=name, component="core/passthru")


def _messages(result: ValidationResult) -> list[str]:
    return [w.message for w in result.warnings]


# ###############
# Result Types
# ###############


class TestValidationResult:
    def test_empty_result(self) -> None:
        result = ValidationResult()
        assert result.warnings == []
        assert not result.has_errors

    def test_has_errors(self) -> None:
        result = ValidationResult(errors=[ValidationError(message="broken")])
        assert result.has_errors

    def test_warnings_do_not_count_as_errors(self) -> None:
        result = ValidationResult(warnings=[ValidationWarning(message="odd")])
        assert not result.has_errors


# ###############
# Clean Graphs
# ###############


def test_empty_graph_is_clean() -> None:
    result = validate(Graph())
    assert result.warnings == []
    assert result.errors == []


def test_declared_and_connected_graph_is_clean() -> None:
    graph = Graph(processes=[_proc("A"), _proc("B")], connections=[_link("A", "B")])
    assert validate(graph).warnings == []


# ###############
# Undeclared Processes
# ###############


class TestUndeclaredProcesses:
    def test_connection_endpoints(self) -> None:
        graph = Graph(processes=[_proc("A")], connections=[_link("A", "B")])
        assert _messages(validate(graph)) == [
            "Process 'B' used by connection ((A, OUT) -> (B, IN)) has no component declaration."
        ]

    def test_each_process_reported_once(self) -> None:
        graph = Graph(connections=[_link("A", "B"), _link("B", "C"), _link("A", "C")])
        messages = _messages(validate(graph))
        assert len(messages) == 3
        assert [m.split("'")[1] for m in messages] == ["A", "B", "C"]

    def test_iip_target(self) -> None:
        graph = Graph(connections=[Connection(data="5s", target=_ep("Ticker", "INTERVAL"))])
        (message,) = _messages(validate(graph))
        assert message.startswith("Process 'Ticker' used by connection ('5s' -> (Ticker, INTERVAL))")

    def test_exported_ports(self) -> None:
        graph = Graph(inports={"FILENAME": _ep("Read")}, outports={"RESULT": _ep("Out", "OUT")})
        assert _messages(validate(graph)) == [
            "Process 'Read' used by inport 'FILENAME' has no component declaration.",
            "Process 'Out' used by outport 'RESULT' has no component declaration.",
        ]

    def test_never_an_error(self) -> None:
        graph = Graph(connections=[_link("A", "B")])
        assert not validate(graph).has_errors


# ###############
# Unconnected Processes
# ###############


class TestUnconnectedProcesses:
    def test_isolated_process(self) -> None:
        graph = Graph(processes=[_proc("A"), _proc("B"), _proc("Lonely")], connections=[_link("A", "B")])
        assert _messages(validate(graph)) == ["Process 'Lonely' is not connected (isolated)."]

    def test_exported_port_counts_as_connected(self) -> None:
        graph = Graph(processes=[_proc("Read")], inports={"FILENAME": _ep("Read")})
        assert validate(graph).warnings == []
