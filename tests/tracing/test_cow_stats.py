"""Tests for copy-on-write tracing models and protocol.

Why these tests exist:
- CowStats is how callers observe whether a copy really cost a clone
- Any object with record() must be accepted as an observer
"""

import pytest

from cowbinder import Binder, CowEvent, CowObserver, CowStats


class EventLog:
    """Minimal CowObserver implementation for testing."""

    def __init__(self) -> None:
        self.events: list[CowEvent] = []

    def record(self, event: CowEvent) -> None:
        self.events.append(event)


def test_stats_and_custom_observers_satisfy_protocol() -> None:
    assert isinstance(CowStats(), CowObserver)
    assert isinstance(EventLog(), CowObserver)


def test_new_stats_are_zero() -> None:
    stats = CowStats()

    assert stats.to_dict() == {event.value: 0 for event in CowEvent}


@pytest.mark.parametrize(
    ("event", "attribute"),
    [
        (CowEvent.CLONE, "clones"),
        (CowEvent.SHARE, "shares"),
        (CowEvent.ALLOCATE, "allocations"),
        (CowEvent.RELEASE, "releases"),
        (CowEvent.IN_PLACE, "in_place"),
    ],
)
def test_record_increments_matching_counter(event, attribute) -> None:
    stats = CowStats()

    stats.record(event)
    stats.record(event)

    assert getattr(stats, attribute) == 2
    assert stats.to_dict()[event.value] == 2


def test_reset() -> None:
    stats = CowStats()
    stats.record(CowEvent.CLONE)

    stats.reset()

    assert stats.clones == 0


def test_event_sequence_for_copy_then_mutate(settings) -> None:
    log = EventLog()
    b = Binder(settings=settings, observer=log)

    b.insert_front("a", 1)
    twin = b.copy()
    twin.insert_front("b", 2)
    b.insert_front("c", 3)

    assert log.events == [
        CowEvent.ALLOCATE,
        CowEvent.SHARE,
        CowEvent.CLONE,
        CowEvent.RELEASE,
        CowEvent.IN_PLACE,
    ]
