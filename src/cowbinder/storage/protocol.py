"""Storage node protocol.

The storage layer abstracts the shared payload behind a binder, enabling:
- Arena-backed linked entries (default)
- Alternative layouts with the same positional guarantees (future)

Usage:
    node = BinderNode()
    assert isinstance(node, NodeStorage)
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Protocol, Self, runtime_checkable

from cowbinder.core.identity import SlotId


@runtime_checkable
class NodeStorage[K, V](Protocol):
    """Abstract storage node interface. Implementations hold the actual entries."""

    def insert_front(self, key: K, value: V) -> SlotId:
        """Prepend an entry."""
        ...

    def insert_after(self, prev_key: K, key: K, value: V) -> SlotId:
        """Insert an entry immediately after prev_key."""
        ...

    def remove_front(self) -> None:
        """Remove the first entry."""
        ...

    def remove(self, key: K) -> None:
        """Remove the entry for key."""
        ...

    def read(self, key: K) -> V:
        """Return the value stored for key."""
        ...

    def locate(self, key: K) -> SlotId:
        """Return the slot holding key."""
        ...

    def contains(self, key: K) -> bool:
        """Check if key is present."""
        ...

    def size(self) -> int:
        """Number of entries."""
        ...

    def value_at(self, slot: SlotId) -> V:
        """Return the value held by a slot."""
        ...

    def store_at(self, slot: SlotId, value: V) -> None:
        """Replace the value held by a slot."""
        ...

    def first_slot(self) -> SlotId | None:
        """Slot of the first entry, None if empty."""
        ...

    def next_slot(self, slot: SlotId) -> SlotId | None:
        """Slot following the given one, None at the end."""
        ...

    def clone(self, copy_value: Callable[[Any], Any] = ...) -> Self:
        """Deep duplicate with a freshly rebuilt index."""
        ...

    def __iter__(self) -> Iterator[V]:
        """Iterate values in sequence order."""
        ...
