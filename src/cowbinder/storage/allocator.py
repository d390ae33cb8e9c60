"""Arena slot allocation.

SlotAllocator is a stateful service that manages slot ID lifecycle for one
storage node's arena.
"""

from __future__ import annotations

from cowbinder.core.identity import SlotId


class SlotAllocator:
    """Allocates arena slots with generation tracking for recycling.

    Maintains a free list of released slot indices with incremented generations
    so that indices are reused while old slot ids stay detectably stale.
    """

    def __init__(self) -> None:
        """Initialize an allocator with no slots handed out."""
        self._next_index = 0
        self._free_list: list[tuple[int, int]] = []  # (index, generation)
        self._generations: dict[int, int] = {}

    @property
    def capacity(self) -> int:
        """Number of distinct indices ever allocated (arena length)."""
        return self._next_index

    def allocate(self) -> SlotId:
        """Allocate a slot, reusing recycled indices when available.

        Returns:
            Newly allocated SlotId.
        """
        if self._free_list:
            index, gen = self._free_list.pop()
            return SlotId(index=index, generation=gen)

        index = self._next_index
        self._next_index += 1
        self._generations[index] = 0
        return SlotId(index=index, generation=0)

    def deallocate(self, slot: SlotId) -> None:
        """Return a slot for reuse with incremented generation.

        Args:
            slot: Slot to release.

        Raises:
            ValueError: If the slot is not currently allocated.
        """
        if not self.is_alive(slot):
            raise ValueError(f"Cannot deallocate slot {slot} that is not alive")

        new_gen = slot.generation + 1
        self._generations[slot.index] = new_gen
        self._free_list.append((slot.index, new_gen))

    def is_alive(self, slot: SlotId) -> bool:
        """Check if a slot id still refers to its original occupant.

        Args:
            slot: Slot to check.

        Returns:
            True if the slot is allocated with this generation.
        """
        current_gen = self._generations.get(slot.index, -1)
        return current_gen == slot.generation
