"""Slot identity models.

Usage:
    slot = SlotId(index=3, generation=1)
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SlotId:
    """Stable position of an entry inside a node's arena.

    The generation distinguishes successive occupants of the same index, so a
    slot id held past its entry's removal is detectably stale rather than
    silently pointing at whatever reuses the index.
    """

    index: int = 0
    generation: int = 0

    def __hash__(self) -> int:
        return hash((self.index, self.generation))
