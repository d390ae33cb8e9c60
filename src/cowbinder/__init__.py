"""cowbinder: ordered key/value binder with copy-on-write value semantics.

Usage:
    from cowbinder import Binder

    b = Binder()
    b.insert_front("a", 1)
    b.insert_after("a", "b", 2)
    b.insert_front("c", 3)
    list(b)  # [3, 1, 2]

    snapshot = b.copy()  # cheap: shares storage until either side mutates
    b.remove("a")
    list(snapshot)  # [3, 1, 2]
"""

__version__ = "0.1.0"

# Handle and views
from cowbinder.binder import Binder, BinderIterator, ValueRef

# Configuration
from cowbinder.config import BinderSettings, get_settings

# Core primitives
from cowbinder.core import (
    BinderError,
    DuplicateKeyError,
    EmptyContainerError,
    MissingKeyError,
    ResourceExhaustionError,
    SlotId,
    StaleReferenceError,
    View,
)

# Storage
from cowbinder.storage import BinderNode, NodeStorage, SlotAllocator

# Tracing
from cowbinder.tracing import CowEvent, CowObserver, CowStats

__all__ = [
    # Version
    "__version__",
    # Binder
    "Binder",
    "BinderIterator",
    "ValueRef",
    # Core
    "SlotId",
    "View",
    "BinderError",
    "EmptyContainerError",
    "DuplicateKeyError",
    "MissingKeyError",
    "ResourceExhaustionError",
    "StaleReferenceError",
    # Storage
    "NodeStorage",
    "BinderNode",
    "SlotAllocator",
    # Config
    "BinderSettings",
    "get_settings",
    # Tracing
    "CowEvent",
    "CowObserver",
    "CowStats",
]
