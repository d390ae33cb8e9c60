"""Storage nodes."""

from cowbinder.storage.allocator import SlotAllocator
from cowbinder.storage.node import BinderNode
from cowbinder.storage.protocol import NodeStorage

__all__ = [
    "NodeStorage",
    "BinderNode",
    "SlotAllocator",
]
