"""Platform connectivity backend - Interface-based transport detection using psutil."""

import asyncio
import socket
from typing import Optional

import psutil
from loguru import logger

from netaware.core.constants import POLL_INTERVAL
from netaware.core.stream import BroadcastStream
from netaware.core.types import ConnectivityResult

# Interface name prefixes, checked in this order (case-insensitive)
VPN_INTERFACE_PREFIXES = ("tun", "tap", "utun", "wg", "ipsec", "sing", "zt", "tailscale")
WIFI_INTERFACE_PREFIXES = ("wl", "wi-fi", "wifi", "wireless", "airport", "ath")
MOBILE_INTERFACE_PREFIXES = ("wwan", "rmnet", "ccmni", "pdp_ip", "ppp", "cellular", "mobile")
BLUETOOTH_INTERFACE_PREFIXES = ("bnep", "bt-pan", "bluetooth")
ETHERNET_INTERFACE_PREFIXES = ("eth", "en", "em", "ethernet")
LOOPBACK_INTERFACE_PREFIXES = ("lo", "loopback")

# Primary transport when several interfaces are up
TRANSPORT_PRIORITY = (
    ConnectivityResult.WIFI,
    ConnectivityResult.MOBILE,
    ConnectivityResult.ETHERNET,
    ConnectivityResult.VPN,
    ConnectivityResult.BLUETOOTH,
    ConnectivityResult.OTHER,
)

_IP_FAMILIES = (socket.AF_INET, socket.AF_INET6)


def classify_interface(name: str) -> Optional[ConnectivityResult]:
    """Map an interface name to a transport. Returns None for loopback."""
    lowered = name.lower()
    if lowered.startswith(LOOPBACK_INTERFACE_PREFIXES):
        return None
    if lowered.startswith(VPN_INTERFACE_PREFIXES) or "vpn" in lowered:
        return ConnectivityResult.VPN
    if lowered.startswith(WIFI_INTERFACE_PREFIXES) or "wlan" in lowered:
        return ConnectivityResult.WIFI
    if lowered.startswith(MOBILE_INTERFACE_PREFIXES):
        return ConnectivityResult.MOBILE
    if lowered.startswith(BLUETOOTH_INTERFACE_PREFIXES):
        return ConnectivityResult.BLUETOOTH
    if lowered.startswith(ETHERNET_INTERFACE_PREFIXES):
        return ConnectivityResult.ETHERNET
    return ConnectivityResult.OTHER


def _has_routable_address(addresses) -> bool:
    for addr in addresses:
        if addr.family not in _IP_FAMILIES:
            continue
        address = (addr.address or "").split("%")[0]
        if address.startswith("127.") or address == "::1" or address.startswith("169.254."):
            continue
        if address.lower().startswith("fe80:"):
            continue
        return True
    return False


class PsutilConnectivityBackend:
    """
    Desktop connectivity backend.

    Reports the primary transport among interfaces that are up and carry a
    routable address. Changes are discovered by polling and published on
    ``on_connectivity_changed`` only when the transport differs from the last
    observed one, whether that came from a poll or a ``check_connectivity()``
    snapshot.
    """

    def __init__(self, poll_interval: float = POLL_INTERVAL):
        self._poll_interval = poll_interval
        self._on_connectivity_changed: BroadcastStream[ConnectivityResult] = BroadcastStream("platform")
        self._task: Optional[asyncio.Task] = None
        self._last_result: Optional[ConnectivityResult] = None

    @property
    def on_connectivity_changed(self) -> BroadcastStream[ConnectivityResult]:
        return self._on_connectivity_changed

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @staticmethod
    def detect() -> ConnectivityResult:
        """Inspect local interfaces and return the primary transport."""
        stats = psutil.net_if_stats()
        addresses = psutil.net_if_addrs()

        found = set()
        for name, stat in stats.items():
            if not stat.isup:
                continue
            transport = classify_interface(name)
            if transport is None:
                continue
            if not _has_routable_address(addresses.get(name, [])):
                continue
            found.add(transport)

        for transport in TRANSPORT_PRIORITY:
            if transport in found:
                return transport
        return ConnectivityResult.NONE

    async def check_connectivity(self) -> ConnectivityResult:
        """One-shot query, run off the event loop. The result becomes the baseline for change detection."""
        result = await asyncio.to_thread(self.detect)
        self._last_result = result
        return result

    def start(self) -> None:
        """Start polling on the running event loop."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._poll_loop())
        logger.info(f"[PlatformConnectivity] Started (interval={self._poll_interval}s)")

    def stop(self) -> None:
        """Stop polling. Safe to call more than once."""
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.info("[PlatformConnectivity] Stopped")

    async def _poll_loop(self) -> None:
        while True:
            try:
                result = await asyncio.to_thread(self.detect)
            except Exception as e:
                logger.warning(f"[PlatformConnectivity] Poll failed: {e}")
            else:
                self._publish(result)
            await asyncio.sleep(self._poll_interval)

    def _publish(self, result: ConnectivityResult) -> None:
        if self._last_result is None:
            # No snapshot taken yet, first poll only seeds the baseline
            self._last_result = result
            return
        if result == self._last_result:
            return

        logger.debug(f"[PlatformConnectivity] Transport changed: {self._last_result} -> {result}")
        self._last_result = result
        self._on_connectivity_changed.add(result)
