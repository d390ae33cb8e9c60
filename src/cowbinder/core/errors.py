"""Errors raised by binder and storage node operations.

All errors are reported synchronously and none are recovered internally.
A failed mutation leaves the container exactly as it was before the call.
"""

from __future__ import annotations

from typing import Any


class BinderError(Exception):
    """Base class for all binder errors."""

    pass


class EmptyContainerError(BinderError):
    """Raised when an operation needs a non-empty binder."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation}() called on an empty binder")
        self.operation = operation


class DuplicateKeyError(BinderError):
    """Raised when inserting a key that is already present."""

    def __init__(self, key: Any) -> None:
        super().__init__(f"Binder already contains an entry with key {key!r}")
        self.key = key


class MissingKeyError(BinderError, KeyError):
    """Raised when a key (or the anchor key of insert_after) is absent."""

    def __init__(self, key: Any) -> None:
        super().__init__(f"Binder has no entry with key {key!r}")
        self.key = key

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class ResourceExhaustionError(BinderError):
    """Raised when indexing a new entry runs out of memory.

    The sequence insertion that preceded the failure has been rolled back.
    """

    pass


class StaleReferenceError(BinderError):
    """Raised when a reference or iterator points at a removed entry."""

    pass
