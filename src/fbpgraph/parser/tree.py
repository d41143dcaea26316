# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reconstruction of parse structure from the flat record log."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from fbpgraph.parser.records import MatchRecord

# ###############
# Public Interface
# ###############


@dataclass
class ParseNode:
    """A node of the reconstructed parse tree.

    Attributes:
        tag: The rule that produced the node.
        begin: Offset of the first matched character.
        end: Offset one past the last matched character.
        children: Child nodes in source order.
    """

    tag: Enum
    begin: int
    end: int
    children: list[ParseNode] = field(default_factory=list)

    def text(self, source: str) -> str:
        """Return the slice of *source* covered by this node."""
        return source[self.begin : self.end]

    def walk(self) -> Iterator[ParseNode]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, tag: Enum) -> list[ParseNode]:
        """Return every node in this subtree produced by *tag*."""
        return [node for node in self.walk() if node.tag == tag]


def order(records: Iterable[MatchRecord]) -> list[list[MatchRecord]]:
    """Group records by nesting depth, keeping completion order within each depth.

    Returns:
        A list indexed by depth. Depths that hold no record map to an empty list.
    """
    ordered: list[list[MatchRecord]] = []
    for record in records:
        while len(ordered) <= record.depth:
            ordered.append([])
        ordered[record.depth].append(record)
    return ordered


def build_tree(records: Iterable[MatchRecord]) -> ParseNode:
    """Rebuild the parse tree from records in completion order.

    Each incoming record adopts every open node it is an ancestor of (see
    :meth:`MatchRecord.contains`). Zero-width records carry no text and are
    left out of the tree. The last record of a successful parse, the start
    rule, becomes the root; if it is zero-width (empty input) the root has
    no children.

    Raises:
        ValueError: If *records* is empty.
    """
    stack: list[tuple[MatchRecord, ParseNode]] = []
    last: MatchRecord | None = None
    for record in records:
        last = record
        if record.is_empty:
            continue
        children: list[ParseNode] = []
        while stack and record.contains(stack[-1][0]):
            children.append(stack.pop()[1])
        children.reverse()
        stack.append((record, ParseNode(record.tag, record.begin, record.end, children)))

    if last is None:
        raise ValueError("Cannot build a parse tree from an empty record log")
    if stack and stack[-1][0] is last:
        return stack[-1][1]
    return ParseNode(last.tag, last.begin, last.end, [node for _, node in stack])
