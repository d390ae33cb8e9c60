"""Protocols for copy-on-write tracing.

These protocols define the interface binders report their sharing decisions
to, allowing counters, loggers or test probes to be plugged in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cowbinder.tracing.models import CowEvent


@runtime_checkable
class CowObserver(Protocol):
    """Receiver of copy-on-write decisions.

    Usage:
        class Probe:
            def record(self, event: CowEvent) -> None:
                print(event)

        binder = Binder(observer=Probe())

    Thread Safety:
        Binders are single-threaded; observers are called synchronously.
    """

    def record(self, event: CowEvent) -> None:
        """Record one decision taken by a binder."""
        ...
