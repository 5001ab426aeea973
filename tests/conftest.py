"""Shared pytest fixtures for registry and feed tests."""

import pytest

from dispatcher import DispatcherSettings, Feed, Registry


@pytest.fixture
def registry():
    """Fresh, non-silent registry isolated from the process-wide default."""
    return Registry(settings=DispatcherSettings())


@pytest.fixture
def feed():
    return Feed("test-feed", history_size=10)


@pytest.fixture
def recorder():
    """Callback that appends every delivered value to `recorder.values`."""

    class Recorder:
        def __init__(self):
            self.values = []
            self.items = []

        def __call__(self, item):
            self.items.append(item)
            self.values.append(item.value)

    return Recorder()
