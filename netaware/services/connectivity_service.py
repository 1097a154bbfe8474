"""
Connectivity Service - Normalizes platform connectivity reports into a usable/unusable signal.

The backend reports a transport (mobile, wifi, ethernet, vpn, ...). This service
collapses every report into a single boolean verdict and republishes it on a
broadcast stream shared by all reload coordinators.
"""

from typing import Optional

from loguru import logger

from netaware.core.constants import DEDUPLICATE_VERDICTS
from netaware.core.exceptions import BackendUnavailable
from netaware.core.protocols import ConnectivityBackend
from netaware.core.stream import BroadcastStream, Subscription
from netaware.core.types import USABLE_TRANSPORTS, ConnectivityResult


class ConnectivityService:
    """
    Process-wide connectivity signal.

    Lifecycle:
        service = await ConnectivityService(backend).init()
        ...
        service.dispose()

    ``has_active_connection`` is overwritten on every raw backend event.
    With ``distinct=True`` the verdict stream only emits when the verdict
    differs from the last emitted one (seeded by the ``init()`` snapshot);
    with ``distinct=False`` every raw event flows downstream.
    """

    def __init__(self, backend: ConnectivityBackend, distinct: bool = DEDUPLICATE_VERDICTS):
        self._backend = backend
        self._distinct = distinct
        self._on_connectivity_changed: BroadcastStream[bool] = BroadcastStream("connectivity")
        self._subscription: Optional[Subscription[ConnectivityResult]] = None
        self._has_connection = False
        self._last_emitted: Optional[bool] = None

    @property
    def on_connectivity_changed(self) -> BroadcastStream[bool]:
        """Stream of verdicts: True when the device has a usable connection."""
        return self._on_connectivity_changed

    @property
    def has_active_connection(self) -> bool:
        """Last computed verdict."""
        return self._has_connection

    @property
    def is_listening(self) -> bool:
        return self._subscription is not None

    @staticmethod
    def classify(result) -> bool:
        """
        Collapse a raw report into a verdict.

        Only direct general-purpose transports (mobile data, wifi) are usable.
        Unknown values are treated as unusable.
        """
        try:
            result = ConnectivityResult(result)
        except ValueError:
            return False
        return result in USABLE_TRANSPORTS

    async def check_transport(self) -> ConnectivityResult:
        """Query the backend once for the raw transport."""
        try:
            return await self._backend.check_connectivity()
        except Exception as e:
            logger.error(f"[ConnectivityService] Connectivity query failed: {e}")
            raise BackendUnavailable(f"Connectivity query failed: {e}") from e

    async def check_snapshot(self) -> bool:
        """Query the backend once and classify the result without storing it."""
        return self.classify(await self.check_transport())

    async def init(self) -> "ConnectivityService":
        """Take the initial snapshot and start listening for changes."""
        verdict = await self.check_snapshot()
        self._has_connection = verdict
        self._last_emitted = verdict

        if self._subscription is not None:
            self._subscription.cancel()
        self._subscription = self._backend.on_connectivity_changed.listen(self._on_result)

        logger.info(f"[ConnectivityService] Initialized (connected={verdict}, distinct={self._distinct})")
        return self

    def _on_result(self, result) -> None:
        self._on_change(self.classify(result))

    def _on_change(self, verdict: bool) -> None:
        self._has_connection = verdict

        if self._distinct and verdict == self._last_emitted:
            logger.debug(f"[ConnectivityService] Verdict {verdict} unchanged, skipped")
            return

        self._last_emitted = verdict
        logger.debug(f"[ConnectivityService] Verdict changed: connected={verdict}")
        self._on_connectivity_changed.add(verdict)

    def dispose(self) -> None:
        """
        Stop listening to the backend and close the verdict stream.

        Every downstream subscription ends with it. Safe to call more than once.
        """
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

        if self._on_connectivity_changed.is_closed:
            return
        self._on_connectivity_changed.close()
        logger.info("[ConnectivityService] Disposed")
