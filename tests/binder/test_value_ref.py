"""Tests for ValueRef, the writable reference returned by read_mut()."""

import warnings

import pytest

from cowbinder import Binder, BinderSettings, StaleReferenceError, ValueRef


def test_read_mut_returns_writable_reference(abc_binder) -> None:
    ref = abc_binder.read_mut("a")

    assert isinstance(ref, ValueRef)
    assert ref.key == "a"
    assert ref.get() == 1

    ref.set(11)
    assert abc_binder["a"] == 11

    ref.value += 1
    assert abc_binder.read("a") == 12


def test_reference_survives_unrelated_in_place_edits(abc_binder) -> None:
    ref = abc_binder.read_mut("b")

    abc_binder.insert_front("z", 0)
    abc_binder.remove("c")
    ref.value = 22

    assert abc_binder["b"] == 22


def test_reference_to_removed_entry_is_stale(abc_binder) -> None:
    ref = abc_binder.read_mut("a")

    abc_binder.remove("a")

    assert not ref.is_valid()
    assert "stale" in repr(ref)
    with pytest.raises(StaleReferenceError):
        ref.value
    with pytest.raises(StaleReferenceError):
        ref.value = 5


def test_write_into_detached_node_warns(abc_binder) -> None:
    ref = abc_binder.read_mut("a")

    abc_binder.clear()

    with pytest.warns(RuntimeWarning, match="no binder holds"):
        ref.value = 5


def test_detached_warning_can_be_disabled(stats) -> None:
    b = Binder([("a", 1)], settings=BinderSettings(warn_detached_writes=False), observer=stats)
    ref = b.read_mut("a")
    b.clear()

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        ref.set(5)

    assert ref.get() == 5


def test_reference_stays_on_node_it_came_from(abc_binder) -> None:
    """After the binder clones away, writes no longer reach it."""
    ref = abc_binder.read_mut("a")
    twin = abc_binder.copy()  # eager clone, abc_binder keeps its node
    abc_binder.assign(twin)  # abc_binder now shares twin's node

    with pytest.warns(RuntimeWarning):
        ref.value = 99

    assert abc_binder["a"] == 1
    assert twin["a"] == 1


def test_repr_shows_entry(abc_binder) -> None:
    assert repr(abc_binder.read_mut("c")) == "ValueRef('c': 3)"
