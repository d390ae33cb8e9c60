"""Value-semantic binder handle over a copy-on-write storage node.

Usage:
    b = Binder()
    b.insert_front("a", 1)
    b.insert_after("a", "b", 2)

    c = b.copy()           # shares the node, no clone yet
    c.insert_front("c", 3) # c clones before mutating, b is untouched

    ref = b.read_mut("a")  # escaped mutable reference
    d = b.copy()           # clones eagerly, ref cannot reach d
    ref.value = 10
    d["a"]                 # 1
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Self

from cowbinder.binder.iteration import BinderIterator
from cowbinder.binder.reference import ValueRef
from cowbinder.config import BinderSettings, get_settings
from cowbinder.core.errors import EmptyContainerError
from cowbinder.core.types import View
from cowbinder.storage.node import BinderNode
from cowbinder.tracing import CowEvent, CowObserver, CowStats

logger = logging.getLogger(__name__)


class Binder[K, V]:
    """Ordered key/value container with value semantics.

    Copies behave as independent containers but share one storage node until
    one of them mutates it. A handle holds at most one node (none when empty)
    and an alias flag that is set while a mutable reference handed out by
    `read_mut()` may still reach the node; copying an aliased binder clones
    immediately instead of sharing.

    Python name binding never copies: use `copy()` (or `copy.copy`) for copy
    construction, `assign()` for copy assignment, `moved_from()` and `take()`
    for moves.

    Args:
        items: Optional (key, value) pairs, appended in order.
        settings: Copy-on-write settings (default: process-wide settings).
        observer: Receiver of copy-on-write decisions (default: new CowStats).
    """

    def __init__(
        self,
        items: Iterable[tuple[K, V]] | None = None,
        *,
        settings: BinderSettings | None = None,
        observer: CowObserver | None = None,
    ) -> None:
        self._node: BinderNode[K, V] | None = None
        self._aliased = False
        self._settings = settings if settings is not None else get_settings()
        self._observer: CowObserver = observer if observer is not None else CowStats()

        if items is not None:
            last: K | None = None
            for position, (key, value) in enumerate(items):
                if position == 0:
                    self.insert_front(key, value)
                else:
                    self.insert_after(last, key, value)  # type: ignore[arg-type]
                last = key

    def __del__(self) -> None:
        node = getattr(self, "_node", None)
        if node is not None:
            node.release()

    # Copy-on-write protocol

    def _clone(self, node: BinderNode[K, V]) -> BinderNode[K, V]:
        logger.debug("Cloning binder node with %d entries", node.size())
        self._observer.record(CowEvent.CLONE)
        return node.clone(self._settings.value_copier())

    def _writable_node(self) -> BinderNode[K, V]:
        """Return a node this handle may mutate or alias.

        Absent node: a fresh one. Exclusively owned: the current one.
        Shared: a private clone, leaving the shared node to its other owners.
        The result is not adopted; callers adopt it only after success.
        """
        if self._node is None:
            self._observer.record(CowEvent.ALLOCATE)
            return BinderNode()
        if self._node.owners == 1:
            self._observer.record(CowEvent.IN_PLACE)
            return self._node
        return self._clone(self._node)

    def _adopt(self, node: BinderNode[K, V] | None) -> None:
        """Make node this handle's node, releasing it instead if empty."""
        if node is not None and not node.size():
            node = None
        if node is self._node:
            return
        if self._node is not None:
            self._node.release()
            self._observer.record(CowEvent.RELEASE)
        self._node = node.acquire() if node is not None else None

    def _require_node(self, operation: str) -> BinderNode[K, V]:
        if self._node is None:
            raise EmptyContainerError(operation)
        return self._node

    # Mutation

    def insert_front(self, key: K, value: V) -> None:
        """Prepend an entry.

        Raises:
            DuplicateKeyError: If key is already present.
        """
        node = self._writable_node()
        node.insert_front(key, value)
        self._adopt(node)
        self._aliased = False

    def insert_after(self, prev_key: K, key: K, value: V) -> None:
        """Insert an entry immediately after the entry for prev_key.

        Raises:
            EmptyContainerError: If the binder is empty.
            DuplicateKeyError: If key is already present.
            MissingKeyError: If prev_key is absent.
        """
        self._require_node("insert_after")
        node = self._writable_node()
        node.insert_after(prev_key, key, value)
        self._adopt(node)
        self._aliased = False

    def remove_front(self) -> None:
        """Remove the first entry.

        Raises:
            EmptyContainerError: If the binder is empty.
        """
        self._require_node("remove_front")
        node = self._writable_node()
        node.remove_front()
        self._adopt(node)
        self._aliased = False

    def remove(self, key: K) -> None:
        """Remove the entry for key.

        Raises:
            EmptyContainerError: If the binder is empty.
            MissingKeyError: If key is absent.
        """
        self._require_node("remove")
        node = self._writable_node()
        node.remove(key)
        self._adopt(node)
        self._aliased = False

    def clear(self) -> None:
        """Drop all entries, regardless of sharing."""
        self._adopt(None)
        self._aliased = False

    # Reads

    def read_mut(self, key: K) -> ValueRef[V]:
        """Return a writable reference to the value for key.

        Clones first if the node is shared, then marks the binder as aliased
        so that a later copy clones eagerly instead of sharing a node the
        reference could still write to.

        Raises:
            EmptyContainerError: If the binder is empty.
            MissingKeyError: If key is absent.
        """
        self._require_node("read_mut")
        node = self._writable_node()
        slot = node.locate(key, operation="read_mut")
        self._adopt(node)
        self._aliased = True
        return ValueRef(node, slot, warn_detached=self._settings.warn_detached_writes)

    def read(self, key: K) -> View[V]:
        """Return the value for key without cloning.

        The returned object is shared with every copy of this binder and must
        not be mutated; use `read_mut()` for that.

        Raises:
            EmptyContainerError: If the binder is empty.
            MissingKeyError: If key is absent.
        """
        return self._require_node("read").read(key)

    def size(self) -> int:
        return 0 if self._node is None else self._node.size()

    # Copy and move

    def copy(self) -> Binder[K, V]:
        """Copy construction: share the node, or clone it if aliased."""
        twin: Binder[K, V] = type(self)(settings=self._settings, observer=self._observer)
        twin._adopt(self._shareable_node())
        return twin

    def assign(self, other: Binder[K, V]) -> Self:
        """Copy assignment: take other's contents, leaving this binder unaliased."""
        self._adopt(other._shareable_node())
        self._aliased = False
        return self

    def take(self, other: Binder[K, V]) -> Self:
        """Move assignment: steal other's node and alias flag, emptying other."""
        if other is self:
            return self
        node, aliased = other._node, other._aliased
        other._node, other._aliased = None, False
        if self._node is not None:
            self._node.release()
            self._observer.record(CowEvent.RELEASE)
        self._node, self._aliased = node, aliased
        return self

    @classmethod
    def moved_from(cls, other: Binder[K, V]) -> Binder[K, V]:
        """Move construction: a new binder holding other's node and alias flag."""
        twin: Binder[K, V] = cls(settings=other._settings, observer=other._observer)
        return twin.take(other)

    def _shareable_node(self) -> BinderNode[K, V] | None:
        if self._node is None:
            return None
        if self._aliased:
            return self._clone(self._node)
        self._observer.record(CowEvent.SHARE)
        return self._node

    def __copy__(self) -> Binder[K, V]:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Binder[K, V]:
        twin: Binder[K, V] = type(self)(settings=self._settings, observer=self._observer)
        if self._node is not None:
            self._observer.record(CowEvent.CLONE)
            twin._adopt(self._node.__deepcopy__(memo))
        return twin

    # Iteration

    def begin(self) -> BinderIterator[V]:
        if self._node is None:
            return BinderIterator()
        return BinderIterator(self._node, self._node.first_slot())

    def end(self) -> BinderIterator[V]:
        return BinderIterator(self._node, None)

    def __iter__(self) -> Iterator[V]:
        return self.begin()

    def keys(self) -> Iterator[K]:
        return iter(()) if self._node is None else self._node.keys()

    def items(self) -> Iterator[tuple[K, V]]:
        return iter(()) if self._node is None else self._node.items()

    # Introspection

    @property
    def is_shared(self) -> bool:
        """True if another binder currently holds the same node."""
        return self._node is not None and self._node.owners > 1

    @property
    def has_outstanding_alias(self) -> bool:
        """True if the last operation handed out a mutable reference."""
        return self._aliased

    @property
    def observer(self) -> CowObserver:
        return self._observer

    @property
    def settings(self) -> BinderSettings:
        return self._settings

    # Dict-style access

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return self._node is not None and self._node.contains(key)  # type: ignore[arg-type]

    def __getitem__(self, key: K) -> View[V]:
        return self.read(key)

    def __delitem__(self, key: K) -> None:
        self.remove(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.items())!r})"
