"""Shared fixtures."""
import pytest

from netaware.core.stream import BroadcastStream
from netaware.core.types import ConnectivityResult


class FakeConnectivityBackend:
    """In-memory backend: snapshot is configurable, changes are pushed with emit()."""

    def __init__(self, snapshot=ConnectivityResult.NONE, error=None):
        self.snapshot = snapshot
        self.error = error
        self.check_calls = 0
        self.started = False
        self.stop_calls = 0
        self._changes = BroadcastStream("fake")

    @property
    def on_connectivity_changed(self):
        return self._changes

    async def check_connectivity(self):
        self.check_calls += 1
        if self.error is not None:
            raise self.error
        return self.snapshot

    def emit(self, *results):
        for result in results:
            self._changes.add(result)

    def start(self):
        self.started = True

    def stop(self):
        self.started = False
        self.stop_calls += 1


@pytest.fixture
def backend():
    return FakeConnectivityBackend()


@pytest.fixture
def make_backend():
    return FakeConnectivityBackend
