"""Mutable references into a binder's storage node.

Usage:
    ref = binder.read_mut("a")
    ref.value += 1
    ref.value.append(x)  # for mutable values
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Any

from cowbinder.core.identity import SlotId

if TYPE_CHECKING:
    from cowbinder.storage.node import BinderNode


class ValueRef[V]:
    """Writable view of one entry's value.

    The reference addresses a slot of the node the binder held when
    `read_mut()` returned. It is not an owner: later mutations on the binder
    may move the binder to another node, after which writes through this
    reference no longer show up in the binder.

    Args:
        node: Node the entry lives in.
        slot: Slot of the entry.
        warn_detached: Warn when writing into a node no binder owns.
    """

    __slots__ = ("_node", "_slot", "_warn_detached")

    def __init__(self, node: BinderNode[Any, V], slot: SlotId, warn_detached: bool = True) -> None:
        self._node = node
        self._slot = slot
        self._warn_detached = warn_detached

    @property
    def key(self) -> Any:
        """Key of the referenced entry.

        Raises:
            StaleReferenceError: If the entry has been removed.
        """
        return self._node.key_at(self._slot)

    @property
    def value(self) -> V:
        """Current value of the referenced entry.

        Raises:
            StaleReferenceError: If the entry has been removed.
        """
        return self._node.value_at(self._slot)

    @value.setter
    def value(self, new_value: V) -> None:
        self._store(new_value)

    def get(self) -> V:
        return self._node.value_at(self._slot)

    def set(self, new_value: V) -> None:
        self._store(new_value, stacklevel=4)

    def is_valid(self) -> bool:
        """Check if the referenced entry still exists in its node."""
        return self._node.is_live(self._slot)

    def _store(self, new_value: V, stacklevel: int = 3) -> None:
        if self._warn_detached and self._node.owners == 0:
            warnings.warn(
                "Writing through a reference into a node no binder holds anymore. "
                "The write will not be visible through any binder.",
                RuntimeWarning,
                stacklevel=stacklevel,
            )
        self._node.store_at(self._slot, new_value)

    def __repr__(self) -> str:
        if not self.is_valid():
            return f"{type(self).__name__}(<stale>)"
        return f"{type(self).__name__}({self.key!r}: {self.value!r})"
