"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from cowbinder import Binder, BinderNode, BinderSettings, CowStats


@pytest.fixture
def stats():
    """Fresh clone counter."""
    return CowStats()


@pytest.fixture
def settings():
    """Settings independent of the environment."""
    return BinderSettings(value_copy="deep", warn_detached_writes=True)


@pytest.fixture
def binder(stats, settings):
    """Empty binder reporting to the stats fixture."""
    return Binder(settings=settings, observer=stats)


@pytest.fixture
def abc_binder(stats, settings):
    """Binder holding [c:3, a:1, b:2], built by front and after inserts."""
    b = Binder(settings=settings, observer=stats)
    b.insert_front("a", 1)
    b.insert_after("a", "b", 2)
    b.insert_front("c", 3)
    stats.reset()
    return b


@pytest.fixture
def node():
    """Node holding [x:10, y:20, z:30]."""
    n = BinderNode()
    n.insert_front("x", 10)
    n.insert_after("x", "y", 20)
    n.insert_after("y", "z", 30)
    return n
