# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Backtracking match engine for parsing expression grammars.

A grammar is a graph of :class:`Expression` objects sharing one
:class:`Cursor`. Matching never raises on a mismatch: every expression
returns ``False`` and leaves the cursor exactly as it found it (position,
record count and nesting depth). Successful :class:`Rule` and
:class:`Action` expressions append a :class:`~fbpgraph.parser.records.MatchRecord`
to the cursor's store; nothing else is produced during matching.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from fbpgraph.parser.records import MatchRecordStore

# ###############
# Public Interface
# ###############

# Terminates every buffer. No expression other than end-of-input checks can
# consume it, so repetitions always stop.
END_SYMBOL = "\x04"


class Checkpoint(NamedTuple):
    """Cursor state captured before an attempt."""

    position: int
    count: int
    depth: int


class Cursor:
    """Scan position over a sentinel-terminated buffer plus its record store.

    Attributes:
        source: The text as given by the caller.
        buffer: ``source`` followed by :data:`END_SYMBOL`.
        position: Offset of the next unconsumed character.
        depth: Current rule nesting depth.
        store: Records committed so far.
    """

    def __init__(self, source: str, store: MatchRecordStore | None = None) -> None:
        self.source = source
        self.buffer = source if source.endswith(END_SYMBOL) else source + END_SYMBOL
        self.position = 0
        self.depth = 0
        self.store = store if store is not None else MatchRecordStore()

    @property
    def current(self) -> str:
        """The character under the cursor (the sentinel at end of input)."""
        return self.buffer[self.position]

    def at_end(self) -> bool:
        """Return True if only the sentinel is left."""
        return self.buffer[self.position] == END_SYMBOL

    def advance(self) -> None:
        self.position += 1

    def checkpoint(self) -> Checkpoint:
        return Checkpoint(self.position, len(self.store), self.depth)

    def rewind(self, checkpoint: Checkpoint) -> None:
        """Restore the state captured by :meth:`checkpoint`."""
        self.position = checkpoint.position
        self.store.truncate(checkpoint.count)
        self.depth = checkpoint.depth

    def commit(self, tag: Enum, begin: int) -> None:
        """Record a match of *tag* spanning ``begin`` up to the current position."""
        self.store.append(tag, begin, self.position, self.depth)

    def reset(self) -> None:
        """Return to the start of the buffer with an empty store."""
        self.position = 0
        self.depth = 0
        self.store.clear()


class Expression:
    """A parsing expression. Subclasses implement :meth:`match`."""

    def match(self, cursor: Cursor) -> bool:
        """Try to match at the cursor, consuming input on success only."""
        raise NotImplementedError


class Char(Expression):
    """Match one literal character."""

    def __init__(self, char: str) -> None:
        if len(char) != 1 or char == END_SYMBOL:
            raise ValueError(f"Char expects a single non-sentinel character, got {char!r}")
        self.char = char

    def match(self, cursor: Cursor) -> bool:
        if cursor.current != self.char:
            return False
        cursor.advance()
        return True


class Literal(Expression):
    """Match a fixed string, optionally ignoring case."""

    def __init__(self, text: str, ignore_case: bool = False) -> None:
        if not text:
            raise ValueError("Literal text must not be empty")
        self.text = text
        self.ignore_case = ignore_case
        self._expected = text.lower() if ignore_case else text

    def match(self, cursor: Cursor) -> bool:
        start = cursor.position
        segment = cursor.buffer[start : start + len(self.text)]
        if self.ignore_case:
            segment = segment.lower()
        if segment != self._expected:
            return False
        cursor.position = start + len(self.text)
        return True


class CharClass(Expression):
    """Match one character from a set of ranges and single characters.

    Each part is either a range written ``"a-z"`` or a string of individual
    characters, e.g. ``CharClass("a-z", "A-Z", "_/-")``.
    """

    def __init__(self, *parts: str) -> None:
        ranges: list[tuple[str, str]] = []
        chars: set[str] = set()
        for part in parts:
            if len(part) == 3 and part[1] == "-":
                ranges.append((part[0], part[2]))
            else:
                chars.update(part)
        self._ranges = tuple(ranges)
        self._chars = frozenset(chars)

    def __contains__(self, char: str) -> bool:
        if char == END_SYMBOL:
            return False
        if char in self._chars:
            return True
        return any(lower <= char <= upper for lower, upper in self._ranges)

    def match(self, cursor: Cursor) -> bool:
        if cursor.current not in self:
            return False
        cursor.advance()
        return True


class AnyChar(Expression):
    """Match any character except the end-of-input sentinel."""

    def match(self, cursor: Cursor) -> bool:
        if cursor.at_end():
            return False
        cursor.advance()
        return True


class Sequence(Expression):
    """Match every item in order, or nothing at all."""

    def __init__(self, *items: Expression) -> None:
        self.items = items

    def match(self, cursor: Cursor) -> bool:
        checkpoint = cursor.checkpoint()
        for item in self.items:
            if not item.match(cursor):
                cursor.rewind(checkpoint)
                return False
        return True


class Choice(Expression):
    """Ordered choice: the first alternative that matches wins."""

    def __init__(self, *alternatives: Expression) -> None:
        self.alternatives = alternatives

    def match(self, cursor: Cursor) -> bool:
        checkpoint = cursor.checkpoint()
        for alternative in self.alternatives:
            if alternative.match(cursor):
                return True
            cursor.rewind(checkpoint)
        return False


class ZeroOrMore(Expression):
    """Match the inner expression as many times as possible.

    An iteration that consumes no input ends the loop and is undone.
    """

    def __init__(self, expression: Expression) -> None:
        self.expression = expression

    def match(self, cursor: Cursor) -> bool:
        while True:
            checkpoint = cursor.checkpoint()
            if not self.expression.match(cursor) or cursor.position == checkpoint.position:
                cursor.rewind(checkpoint)
                return True


class OneOrMore(ZeroOrMore):
    """Match the inner expression at least once."""

    def match(self, cursor: Cursor) -> bool:
        if not self.expression.match(cursor):
            return False
        return super().match(cursor)


class Optional(Expression):
    """Match the inner expression if possible; always succeeds."""

    def __init__(self, expression: Expression) -> None:
        self.expression = expression

    def match(self, cursor: Cursor) -> bool:
        checkpoint = cursor.checkpoint()
        if not self.expression.match(cursor):
            cursor.rewind(checkpoint)
        return True


class Not(Expression):
    """Negative lookahead: succeed without consuming iff the inner expression fails."""

    def __init__(self, expression: Expression) -> None:
        self.expression = expression

    def match(self, cursor: Cursor) -> bool:
        checkpoint = cursor.checkpoint()
        matched = self.expression.match(cursor)
        cursor.rewind(checkpoint)
        return not matched


class Rule(Expression):
    """A tagged production that commits a record when it matches.

    The body may be supplied later through :meth:`define`, which allows
    recursive productions.
    """

    def __init__(self, tag: Enum, expression: Expression | None = None) -> None:
        self.tag = tag
        self.expression = expression

    def define(self, expression: Expression) -> Rule:
        self.expression = expression
        return self

    def match(self, cursor: Cursor) -> bool:
        if self.expression is None:
            raise RuntimeError(f"Rule {self.tag.value!r} was never defined")
        checkpoint = cursor.checkpoint()
        begin = cursor.position
        cursor.depth += 1
        if not self.expression.match(cursor):
            cursor.rewind(checkpoint)
            return False
        cursor.depth -= 1
        cursor.commit(self.tag, begin)
        return True


class Action(Expression):
    """Commit a zero-width marker record; always succeeds."""

    def __init__(self, tag: Enum) -> None:
        self.tag = tag

    def match(self, cursor: Cursor) -> bool:
        cursor.commit(self.tag, cursor.position)
        return True
