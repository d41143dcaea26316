# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Post-parse checks for FBP graphs.

A graph can conform to the grammar and still be incomplete as a network.
These checks run on a successfully parsed graph and report such issues as
warnings; no check currently rejects a graph, so :attr:`ValidationResult.has_errors`
is False for every parsed graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fbpgraph.model.entities import Endpoint, Graph

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue found in a graph.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A fatal issue that makes a graph unusable.

    None of the built-in checks produce one; checks added on top of
    :func:`validate` (or callers building a :class:`ValidationResult`
    themselves) report fatal issues with it, and :attr:`ValidationResult.has_errors`
    reflects them.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running the graph checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Fatal errors that indicate an invalid graph.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def validate(graph: Graph) -> ValidationResult:
    """Run all checks on a parsed Graph.

    Checks performed:

    1. **Undeclared processes** (warning): a connection endpoint or exported
       port names a process that was never given a component.

    2. **Unconnected processes** (warning): a declared process takes part in
       no connection and no exported port.

    Args:
        graph: The graph to check.

    Returns:
        A :class:`ValidationResult`; an empty result means nothing was found.
    """
    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []

    warnings.extend(_check_undeclared_processes(graph))
    warnings.extend(_check_unconnected_processes(graph))

    return ValidationResult(warnings=warnings, errors=errors)


# ################
# Implementation
# ################


def _referenced_endpoints(graph: Graph) -> list[tuple[str, Endpoint]]:
    """Return every endpoint the graph refers to, labelled by where it appears."""
    endpoints: list[tuple[str, Endpoint]] = []
    for connection in graph.connections:
        if connection.source is not None:
            endpoints.append((f"connection {connection}", connection.source))
        endpoints.append((f"connection {connection}", connection.target))
    for name, endpoint in graph.inports.items():
        endpoints.append((f"inport '{name}'", endpoint))
    for name, endpoint in graph.outports.items():
        endpoints.append((f"outport '{name}'", endpoint))
    return endpoints


def _check_undeclared_processes(graph: Graph) -> list[ValidationWarning]:
    """Return warnings for referenced processes that have no component."""
    declared = set(graph.process_names())
    reported: set[str] = set()
    warnings: list[ValidationWarning] = []
    for label, endpoint in _referenced_endpoints(graph):
        if endpoint.process in declared or endpoint.process in reported:
            continue
        reported.add(endpoint.process)
        warnings.append(
            ValidationWarning(message=f"Process '{endpoint.process}' used by {label} has no component declaration.")
        )
    return warnings


def _check_unconnected_processes(graph: Graph) -> list[ValidationWarning]:
    """Return warnings for declared processes that nothing refers to."""
    used = {endpoint.process for _, endpoint in _referenced_endpoints(graph)}
    return [
        ValidationWarning(message=f"Process '{process.name}' is not connected (isolated).")
        for process in graph.processes
        if process.name not in used
    ]
