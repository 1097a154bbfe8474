"""Protocols for type-safe dependency injection."""
from typing import Any, Protocol

from netaware.core.stream import BroadcastStream
from netaware.core.types import ConnectivityResult


class ConnectivityBackend(Protocol):
    """Platform connectivity source."""

    async def check_connectivity(self) -> ConnectivityResult:
        """One-shot query of the current transport."""
        ...

    @property
    def on_connectivity_changed(self) -> BroadcastStream[ConnectivityResult]:
        """Long-lived, multi-subscriber stream of raw transport changes."""
        ...


class ConnectionAwareConsumer(Protocol):
    """
    UI unit driven by a ReloadCoordinator.

    May also define ``async load_state()`` and ``should_reload()``; the
    coordinator looks them up at call time and falls back to a re-render and
    True respectively.
    """

    def build_page(self) -> Any:
        """Produce the normal content shown while connected."""
        ...

    def request_render(self) -> None:
        """Refresh the visible UI without reloading data."""
        ...
