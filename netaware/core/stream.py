"""
Broadcast Stream - synchronous multi-subscriber event stream.

Every listener receives every value added after it subscribed, in the order the
values were added. Listeners are invoked synchronously from ``add()`` and must
not block.

A cancelled subscription never receives another value, even when it is
cancelled by another listener in the middle of a dispatch.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, List, TypeVar

from loguru import logger

T = TypeVar("T")


class Subscription(Generic[T]):
    """Handle for a single listener registered on a BroadcastStream."""

    def __init__(self, stream: "BroadcastStream[T]", on_data: Callable[[T], None]):
        self._stream = stream
        self._on_data = on_data
        self._active = True

    @property
    def is_active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop delivery to this listener. Subsequent calls are no-ops."""
        if not self._active:
            return
        self._active = False
        self._stream._remove(self)

    def _deliver(self, value: T) -> None:
        if self._active:
            self._on_data(value)


class BroadcastStream(Generic[T]):
    """
    Stream of values shared by any number of listeners.

    Thread-safe: the subscription list is protected by a lock, dispatch works
    on a snapshot so listeners may subscribe or cancel while being notified.
    """

    def __init__(self, name: str = "stream"):
        self._name = name
        self._subscriptions: List[Subscription[T]] = []
        self._lock = threading.Lock()
        self._closed = False

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def listen(self, on_data: Callable[[T], None]) -> Subscription[T]:
        """Register a listener and return its subscription handle."""
        subscription = Subscription(self, on_data)
        with self._lock:
            if self._closed:
                subscription._active = False
                return subscription
            self._subscriptions.append(subscription)
        return subscription

    def add(self, value: T) -> None:
        """Deliver a value to every active listener."""
        with self._lock:
            if self._closed:
                return
            subscriptions = list(self._subscriptions)

        for subscription in subscriptions:
            try:
                subscription._deliver(value)
            except Exception:
                # One failing listener must not starve the others
                logger.opt(exception=True).error(f"[BroadcastStream:{self._name}] Listener failed on {value!r}")

    def close(self) -> None:
        """Cancel all subscriptions and ignore further values."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            subscriptions = list(self._subscriptions)
            self._subscriptions.clear()

        for subscription in subscriptions:
            subscription._active = False

    def _remove(self, subscription: Subscription[T]) -> None:
        with self._lock:
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                pass
