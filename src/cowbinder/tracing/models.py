"""Data models for copy-on-write tracing.

Counters are kept per binder lineage: a copy reports to the same observer as
the binder it was copied from, so a test can see how many deep clones a
sequence of operations really cost.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class CowEvent(Enum):
    """Decision taken by a binder before operating on its node."""

    ALLOCATE = "allocate"
    """Empty binder created a fresh node."""

    IN_PLACE = "in_place"
    """Exclusively owned node reused without cloning."""

    CLONE = "clone"
    """Node deep-duplicated (shared at mutation time, or aliased at copy time)."""

    SHARE = "share"
    """Copy took a counted reference to the same node."""

    RELEASE = "release"
    """Binder let go of its node."""


@dataclass(slots=True)
class CowStats:
    """Counts of copy-on-write decisions.

    Example:
        stats = CowStats()
        binder = Binder(observer=stats)
        binder.insert_front("a", 1)
        other = binder.copy()
        other.insert_front("b", 2)
        stats.clones  # 1
    """

    counts: dict[CowEvent, int] = field(default_factory=lambda: dict.fromkeys(CowEvent, 0))

    def record(self, event: CowEvent) -> None:
        """Count one occurrence of event."""
        self.counts[event] += 1

    @property
    def clones(self) -> int:
        return self.counts[CowEvent.CLONE]

    @property
    def shares(self) -> int:
        return self.counts[CowEvent.SHARE]

    @property
    def allocations(self) -> int:
        return self.counts[CowEvent.ALLOCATE]

    @property
    def releases(self) -> int:
        return self.counts[CowEvent.RELEASE]

    @property
    def in_place(self) -> int:
        return self.counts[CowEvent.IN_PLACE]

    def reset(self) -> None:
        """Zero all counters."""
        for event in CowEvent:
            self.counts[event] = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to JSON-serializable dictionary."""
        return {event.value: count for event, count in self.counts.items()}
