"""Tracing infrastructure for observing copy-on-write decisions.

Usage:
    from cowbinder.tracing import CowStats

    stats = CowStats()
    binder = Binder(observer=stats)
    ...
    assert stats.clones == 0
"""

from cowbinder.tracing.models import CowEvent, CowStats
from cowbinder.tracing.protocol import CowObserver

__all__ = [
    "CowEvent",
    "CowObserver",
    "CowStats",
]
