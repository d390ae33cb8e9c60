"""Forward read-only iteration over a binder's values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from cowbinder.core.identity import SlotId

if TYPE_CHECKING:
    from cowbinder.storage.node import BinderNode


class BinderIterator[V]:
    """Position in the value sequence of one storage node.

    Two iterators are equal only if they traverse the same node instance and
    stand at the same position. Iterators taken before and after a clone are
    therefore never equal, even over equal contents. An iterator from an empty
    binder has no node and equals any other such iterator.

    The iterator reads the node directly: it never clones and never counts as
    an owner. It follows the Python iterator protocol, so it can be consumed
    with a for loop; `copy()` keeps a position for later comparison.
    """

    __slots__ = ("_node", "_slot")

    def __init__(self, node: BinderNode[Any, V] | None = None, slot: SlotId | None = None) -> None:
        self._node = node
        self._slot = slot

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> V:
        if self._node is None or self._slot is None:
            raise StopIteration
        value = self._node.value_at(self._slot)
        self._slot = self._node.next_slot(self._slot)
        return value

    @property
    def value(self) -> V:
        """Value at the current position.

        Raises:
            IndexError: If the iterator is at the end.
        """
        if self._node is None or self._slot is None:
            raise IndexError("Iterator is past the last value")
        return self._node.value_at(self._slot)

    def at_end(self) -> bool:
        return self._slot is None

    def copy(self) -> Self:
        return type(self)(self._node, self._slot)

    def __copy__(self) -> Self:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        # Position identity is the node instance, never duplicate it
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinderIterator):
            return NotImplemented
        return self._node is other._node and self._slot == other._slot

    def __repr__(self) -> str:
        if self._node is None:
            return f"{type(self).__name__}(<no node>)"
        position = "end" if self._slot is None else self._slot.index
        return f"{type(self).__name__}(node={id(self._node):#x}, position={position})"
