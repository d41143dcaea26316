# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line/column annotated diagnostics for failed parses."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from fbpgraph.parser.records import MatchRecord
from fbpgraph.parser.tree import order

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Diagnostic:
    """The last successful match of one rule depth when a parse failed.

    Attributes:
        rule: Name of the rule that matched.
        begin_line: 1-based line where the match starts.
        begin_column: 1-based column where the match starts.
        end_line: 1-based line of the offset just past the match.
        end_column: 1-based column of the offset just past the match.
        text: The matched source text.
    """

    rule: str
    begin_line: int
    begin_column: int
    end_line: int
    end_column: int
    text: str

    def __str__(self) -> str:
        return (
            f"parse error near {self.rule} "
            f"(line {self.begin_line} column {self.begin_column} - "
            f"line {self.end_line} column {self.end_column}):\n{self.text}"
        )


class ParseError(Exception):
    """Raised when source text does not conform to the grammar.

    Attributes:
        diagnostics: Deepest-first chain of the rules active where matching stopped.
        line: 1-based line where matching stopped (the furthest diagnostic end), if any.
        column: 1-based column where matching stopped, if any.
    """

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        if diagnostics:
            self.line: int | None
            self.column: int | None
            self.line, self.column = max((d.end_line, d.end_column) for d in diagnostics)
            message = "\n".join(str(diagnostic) for diagnostic in diagnostics)
        else:
            self.line = None
            self.column = None
            message = "parse error at start of input"
        super().__init__(message)


def line_column(source: str, offset: int) -> tuple[int, int]:
    """Translate a character offset into a 1-based ``(line, column)`` pair.

    An offset at the end of *source* maps to the column after the last character.
    """
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def diagnose(source: str, records: Iterable[MatchRecord]) -> list[Diagnostic]:
    """Describe how far a failed parse got.

    For every nesting depth, deepest first, the record that reached furthest
    into the source is reported; among records ending at the same offset the
    most recently written one wins. *records* should include matches
    discarded by backtracking, since those mark the furthest progress.
    """
    diagnostics: list[Diagnostic] = []
    for level in reversed(order(records)):
        if not level:
            continue
        record = max(reversed(level), key=lambda r: r.end)
        begin_line, begin_column = line_column(source, record.begin)
        end_line, end_column = line_column(source, record.end)
        diagnostics.append(
            Diagnostic(
                rule=str(record.tag.value),
                begin_line=begin_line,
                begin_column=begin_column,
                end_line=end_line,
                end_column=end_column,
                text=source[record.begin : record.end],
            )
        )
    return diagnostics
