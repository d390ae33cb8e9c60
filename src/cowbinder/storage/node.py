"""Arena-backed storage node.

A node holds the ordered sequence of (key, value) entries together with a key
index. Entries live in an arena of generational slots linked in sequence
order, so the positions cached by the index stay valid across insertions and
removals elsewhere in the sequence.

Usage:
    node = BinderNode()
    node.insert_front("a", 1)
    node.insert_after("a", "b", 2)
    list(node)  # [1, 2]
"""

from __future__ import annotations

import copy as cp
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Self

from cowbinder.core.errors import (
    DuplicateKeyError,
    EmptyContainerError,
    MissingKeyError,
    ResourceExhaustionError,
    StaleReferenceError,
)
from cowbinder.core.identity import SlotId
from cowbinder.storage.allocator import SlotAllocator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Entry:
    key: Any
    value: Any
    prev: SlotId | None = None
    next: SlotId | None = None


class BinderNode[K, V]:
    """Shared, clonable payload of a binder.

    Structure:
        _arena[slot.index] = entry (None for free slots)
        _index[key] = slot of the entry holding key

    Invariant: the index has exactly one item per linked entry and every
    indexed slot holds the key it is indexed under.

    The owner count is maintained by the handles that adopt the node; readers
    such as iterators and value references are not owners.
    """

    def __init__(self) -> None:
        self._allocator = SlotAllocator()
        self._arena: list[_Entry | None] = []
        self._index: dict[K, SlotId] = {}
        self._head: SlotId | None = None
        self._size = 0
        self._owners = 0

    # Ownership

    @property
    def owners(self) -> int:
        """Number of handles currently holding this node."""
        return self._owners

    def acquire(self) -> Self:
        """Register one more owning handle."""
        self._owners += 1
        return self

    def release(self) -> None:
        """Drop one owning handle."""
        if self._owners > 0:
            self._owners -= 1

    # Arena internals

    def _entry(self, slot: SlotId) -> _Entry:
        if not self._allocator.is_alive(slot):
            raise StaleReferenceError(f"Slot {slot} no longer holds an entry")
        entry = self._arena[slot.index]
        assert entry is not None
        return entry

    def _link(self, key: K, value: V, after: SlotId | None) -> SlotId:
        """Place a new entry in the sequence after `after` (front if None)."""
        slot = self._allocator.allocate()
        entry = _Entry(key, value)
        if slot.index == len(self._arena):
            self._arena.append(entry)
        else:
            self._arena[slot.index] = entry

        if after is None:
            entry.next = self._head
            if self._head is not None:
                self._entry(self._head).prev = slot
            self._head = slot
        else:
            prev_entry = self._entry(after)
            entry.prev = after
            entry.next = prev_entry.next
            if prev_entry.next is not None:
                self._entry(prev_entry.next).prev = slot
            prev_entry.next = slot

        self._size += 1
        return slot

    def _unlink(self, slot: SlotId) -> _Entry:
        """Take an entry out of the sequence and free its slot."""
        entry = self._entry(slot)
        if entry.prev is not None:
            self._entry(entry.prev).next = entry.next
        else:
            self._head = entry.next
        if entry.next is not None:
            self._entry(entry.next).prev = entry.prev

        self._arena[slot.index] = None
        self._allocator.deallocate(slot)
        self._size -= 1
        return entry

    def _index_or_rollback(self, key: K, slot: SlotId) -> None:
        """Index a freshly linked entry, unlinking it again if indexing fails."""
        try:
            self._index[key] = slot
        except MemoryError as e:
            self._unlink(slot)
            logger.debug("Rolled back insertion of %r after running out of memory", key)
            raise ResourceExhaustionError(f"Out of memory while indexing key {key!r}") from e
        except BaseException:
            self._unlink(slot)
            logger.debug("Rolled back insertion of %r after indexing failed", key)
            raise

    def _walk(self) -> Iterator[_Entry]:
        slot = self._head
        while slot is not None:
            entry = self._entry(slot)
            yield entry
            slot = entry.next

    # Structural operations

    def insert_front(self, key: K, value: V) -> SlotId:
        """Prepend an entry.

        Args:
            key: Key of the new entry, must not be present.
            value: Value to store.

        Returns:
            Slot of the new entry.

        Raises:
            DuplicateKeyError: If key is already present.
            ResourceExhaustionError: If indexing ran out of memory (node unchanged).
        """
        if key in self._index:
            raise DuplicateKeyError(key)
        slot = self._link(key, value, after=None)
        self._index_or_rollback(key, slot)
        return slot

    def insert_after(self, prev_key: K, key: K, value: V) -> SlotId:
        """Insert an entry immediately after the entry for prev_key.

        Args:
            prev_key: Key the new entry should follow.
            key: Key of the new entry, must not be present.
            value: Value to store.

        Returns:
            Slot of the new entry.

        Raises:
            EmptyContainerError: If the node has no entries.
            DuplicateKeyError: If key is already present.
            MissingKeyError: If prev_key is absent.
            ResourceExhaustionError: If indexing ran out of memory (node unchanged).
        """
        if not self._size:
            raise EmptyContainerError("insert_after")
        if key in self._index:
            raise DuplicateKeyError(key)
        prev_slot = self._index.get(prev_key)
        if prev_slot is None:
            raise MissingKeyError(prev_key)
        slot = self._link(key, value, after=prev_slot)
        self._index_or_rollback(key, slot)
        return slot

    def remove_front(self) -> None:
        """Remove the first entry.

        Raises:
            EmptyContainerError: If the node has no entries.
        """
        if self._head is None:
            raise EmptyContainerError("remove_front")
        entry = self._unlink(self._head)
        del self._index[entry.key]

    def remove(self, key: K) -> None:
        """Remove the entry for key.

        Raises:
            EmptyContainerError: If the node has no entries.
            MissingKeyError: If key is absent.
        """
        slot = self.locate(key, operation="remove")
        self._unlink(slot)
        del self._index[key]

    def locate(self, key: K, operation: str = "locate") -> SlotId:
        """Return the slot holding key.

        Raises:
            EmptyContainerError: If the node has no entries.
            MissingKeyError: If key is absent.
        """
        if not self._size:
            raise EmptyContainerError(operation)
        slot = self._index.get(key)
        if slot is None:
            raise MissingKeyError(key)
        return slot

    def read(self, key: K) -> V:
        """Return the value stored for key without altering structure."""
        return self._entry(self.locate(key, operation="read")).value

    def contains(self, key: K) -> bool:
        return key in self._index

    def size(self) -> int:
        return self._size

    def value_at(self, slot: SlotId) -> V:
        """Return the value held by slot.

        Raises:
            StaleReferenceError: If the slot's entry has been removed.
        """
        return self._entry(slot).value

    def store_at(self, slot: SlotId, value: V) -> None:
        """Replace the value held by slot. Structure and index are untouched."""
        self._entry(slot).value = value

    def key_at(self, slot: SlotId) -> K:
        return self._entry(slot).key

    def is_live(self, slot: SlotId) -> bool:
        return self._allocator.is_alive(slot)

    def first_slot(self) -> SlotId | None:
        return self._head

    def next_slot(self, slot: SlotId) -> SlotId | None:
        return self._entry(slot).next

    # Copying

    def clone(self, copy_value: Callable[[Any], Any] = cp.deepcopy) -> Self:
        """Duplicate the node entry by entry.

        The clone gets its own arena and an index rebuilt against it; slot ids
        from this node are meaningless in the clone. The clone has no owners.

        Args:
            copy_value: Function used to duplicate each value (default deepcopy).

        Returns:
            New node with equal keys, copied values and the same order.
        """
        twin = type(self)()
        prev: SlotId | None = None
        for entry in self._walk():
            prev = twin._link(entry.key, copy_value(entry.value), after=prev)
            twin._index[entry.key] = prev
        return twin

    def __copy__(self) -> Self:
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self.clone(lambda value: cp.deepcopy(value, memo))

    # Views

    def __iter__(self) -> Iterator[V]:
        for entry in self._walk():
            yield entry.value

    def __len__(self) -> int:
        return self._size

    def keys(self) -> Iterator[K]:
        for entry in self._walk():
            yield entry.key

    def items(self) -> Iterator[tuple[K, V]]:
        for entry in self._walk():
            yield entry.key, entry.value

    def is_consistent(self) -> bool:
        """Check that sequence and index describe the same entries."""
        if len(self._index) != self._size:
            return False
        count = 0
        for slot, entry in zip(self._slots(), self._walk(), strict=True):
            if self._index.get(entry.key) != slot:
                return False
            count += 1
        return count == self._size

    def _slots(self) -> Iterator[SlotId]:
        slot = self._head
        while slot is not None:
            yield slot
            slot = self._entry(slot).next

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.items())!r})"
