"""Core primitives: identity, errors and type aliases.

Architecture Note:
    core/ contains stateless building blocks with no runtime state.
    For the stateful storage node and handle, see storage/ and binder/.
"""

from cowbinder.core.errors import (
    BinderError,
    DuplicateKeyError,
    EmptyContainerError,
    MissingKeyError,
    ResourceExhaustionError,
    StaleReferenceError,
)
from cowbinder.core.identity import SlotId
from cowbinder.core.types import View

__all__ = [
    # Types
    "View",
    # Identity
    "SlotId",
    # Errors
    "BinderError",
    "EmptyContainerError",
    "DuplicateKeyError",
    "MissingKeyError",
    "ResourceExhaustionError",
    "StaleReferenceError",
]
