"""
Reload Coordinator - Drives a consumer's load / reload-on-reconnect / fallback lifecycle.

One coordinator per consumer. The consumer calls ``attach()`` from its mount
hook and ``detach()`` from its unmount hook; in between, every verdict from the
shared ConnectivityService is turned into either a reload or a plain re-render.

Consumer contract (see ``ConnectionAwareConsumer``):
- ``build_page()``      required, normal content while connected
- ``request_render()``  required, refresh the UI without loading data
- ``load_state()``      optional coroutine, defaults to a plain re-render
- ``should_reload()``   optional predicate, defaults to True
"""

from __future__ import annotations

import asyncio
import sys
from typing import Any, Awaitable, Callable, Optional, Set

from loguru import logger

from netaware.core.protocols import ConnectionAwareConsumer
from netaware.core.stream import Subscription
from netaware.services.connectivity_service import ConnectivityService

TaskRunner = Callable[[Callable[[], Awaitable[None]]], Any]


def _default_exit_app() -> None:
    logger.info("[ReloadCoordinator] Exit requested from disconnected state")
    sys.exit(0)


class ReloadCoordinator:
    """
    Connected / Disconnected state machine bound to a single consumer.

    Reloads are scheduled, never awaited inline, so the stream listener stays
    synchronous. Errors raised by ``load_state()`` are not caught: they surface
    on the scheduled task and are forwarded to the event loop's exception
    handler.
    """

    def __init__(
        self,
        signal: ConnectivityService,
        exit_app: Optional[Callable[[], None]] = None,
        task_runner: Optional[TaskRunner] = None,
    ):
        """
        Args:
            signal: Shared connectivity service (already initialized)
            exit_app: Action for the back gesture on the fallback view
            task_runner: Schedules a coroutine function, e.g. flet's page.run_task.
                Defaults to a task on the running asyncio loop.
        """
        self._signal = signal
        self._exit_app = exit_app or _default_exit_app
        self._task_runner = task_runner

        self._consumer: Optional[ConnectionAwareConsumer] = None
        self._subscription: Optional[Subscription[bool]] = None
        self._pending: Set[asyncio.Task] = set()

        self.has_connection = False

    @property
    def is_attached(self) -> bool:
        """False once detached; consumers check this before applying late load results."""
        return self._subscription is not None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def attach(self, consumer: ConnectionAwareConsumer):
        """
        Bind to a consumer and run the initial load.

        Any previous subscription is cancelled first, so a coordinator never
        holds more than one. Returns the scheduled initial reload.
        """
        if self._subscription is not None:
            logger.debug("[ReloadCoordinator] Re-attach, cancelling previous subscription")
            self._subscription.cancel()
            self._subscription = None

        self._consumer = consumer
        self.has_connection = self._signal.has_active_connection
        self._subscription = self._signal.on_connectivity_changed.listen(self._on_verdict)

        logger.debug(
            f"[ReloadCoordinator] Attached to {type(consumer).__name__} (connected={self.has_connection})"
        )
        return self._schedule(self.reload_state)

    def detach(self) -> None:
        """Cancel the subscription. Calling it again is a no-op."""
        if self._subscription is None:
            return
        self._subscription.cancel()
        self._subscription = None
        logger.debug(f"[ReloadCoordinator] Detached from {type(self._consumer).__name__}")

    # -------------------------------------------------------------------------
    # Reload policy
    # -------------------------------------------------------------------------

    def _on_verdict(self, verdict: bool) -> None:
        self.has_connection = verdict

        if verdict and self.should_reload():
            self._schedule(self.reload_state)
        else:
            self._request_render()

    async def reload_state(self) -> None:
        """Run the consumer's load, or just re-render when it has none."""
        load_state = getattr(self._consumer, "load_state", None)
        if load_state is None:
            self._request_render()
            return
        await load_state()

    def should_reload(self) -> bool:
        """Consumer's ``should_reload()`` when defined, otherwise always True."""
        predicate = getattr(self._consumer, "should_reload", None)
        if predicate is None:
            return True
        return bool(predicate())

    def retry(self):
        """Force a reload, e.g. from the fallback view's retry button."""
        logger.debug("[ReloadCoordinator] Manual reload requested")
        return self._schedule(self.reload_state)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self):
        """Normal content while connected, the no-connection fallback otherwise."""
        if self.has_connection:
            return self._consumer.build_page()

        # Lazy-import Flet, headless callers never reach this branch
        from netaware.ui.components.no_connection_state import NoConnectionState

        return NoConnectionState(on_retry=self.retry)

    def handle_back(self) -> bool:
        """
        Back/dismiss gesture.

        While disconnected there is nothing to go back to, so the application
        exits instead. Returns whether the navigation pop should proceed.
        """
        if self.has_connection:
            return True
        self._exit_app()
        return False

    def _request_render(self) -> None:
        if self._consumer is None or not self.is_attached:
            return
        self._consumer.request_render()

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def _schedule(self, coro_fn: Callable[[], Awaitable[None]]):
        if self._task_runner is not None:
            return self._task_runner(coro_fn)

        task = asyncio.get_running_loop().create_task(coro_fn())
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return

        error = task.exception()
        if error is None:
            return

        task.get_loop().call_exception_handler(
            {
                "message": "Unhandled error in load_state",
                "exception": error,
                "task": task,
            }
        )
