# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Append-only log of completed grammar matches.

Records are written in completion order (post-order of the backtracking
search). Backtracking rewinds the logical length only; slots above it keep
their content until overwritten, which lets diagnostics see how far a failed
parse got.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_CAPACITY = 1024


@dataclass(frozen=True)
class MatchRecord:
    """One successful rule application.

    Attributes:
        tag: The rule (or capture/action) that matched.
        begin: Offset of the first matched character.
        end: Offset one past the last matched character.
        depth: Rule nesting depth at the point the match was committed.
    """

    tag: Enum
    begin: int
    end: int
    depth: int

    @property
    def is_empty(self) -> bool:
        """Return True for zero-width records."""
        return self.begin == self.end

    def contains(self, other: MatchRecord) -> bool:
        """Return True if this record is an ancestor of *other*."""
        return self.begin <= other.begin and self.end >= other.end and self.depth < other.depth


class MatchRecordStore:
    """Index-addressed record log that doubles its capacity on demand."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Record store capacity must be positive, got {capacity}")
        self._slots: list[MatchRecord | None] = [None] * capacity
        self._count = 0
        self._high_water = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[MatchRecord]:
        for index in range(self._count):
            yield self.get(index)

    @property
    def capacity(self) -> int:
        """Number of slots currently allocated."""
        return len(self._slots)

    def append(self, tag: Enum, begin: int, end: int, depth: int) -> int:
        """Write a record at the next index and return that index."""
        index = self._count
        if index >= len(self._slots):
            self._expand()
        self._slots[index] = MatchRecord(tag, begin, end, depth)
        self._count = index + 1
        if self._count > self._high_water:
            self._high_water = self._count
        return index

    def get(self, index: int) -> MatchRecord:
        """Return the record at *index*.

        Raises:
            IndexError: If no record has been committed at *index*.
        """
        if not 0 <= index < self._count:
            raise IndexError(f"No record at index {index} (store holds {self._count})")
        record = self._slots[index]
        assert record is not None
        return record

    def truncate(self, count: int) -> None:
        """Rewind the logical length to *count* records."""
        if not 0 <= count <= self._count:
            raise ValueError(f"Cannot truncate store of {self._count} records to {count}")
        self._count = count

    def trim(self) -> None:
        """Discard every slot beyond the committed records."""
        del self._slots[self._count :]
        self._high_water = self._count

    def written(self) -> list[MatchRecord]:
        """Return every record written so far, including ones later rewound."""
        return [record for record in self._slots[: self._high_water] if record is not None]

    def clear(self) -> None:
        """Forget all records but keep the allocated capacity."""
        self._count = 0
        self._high_water = 0
        self._slots = [None] * len(self._slots)

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------

    def _expand(self) -> None:
        size = len(self._slots)
        self._slots.extend([None] * max(size, 1))
        logger.debug("Record store grew from %d to %d slots", size, len(self._slots))
