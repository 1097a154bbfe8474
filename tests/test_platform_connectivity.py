"""Unit tests for PsutilConnectivityBackend."""
import asyncio
import socket
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from netaware.core.types import ConnectivityResult
from netaware.services.connectivity_service import ConnectivityService
from netaware.services.platform_connectivity import PsutilConnectivityBackend, classify_interface


def _stats(**interfaces):
    return {name: SimpleNamespace(isup=isup) for name, isup in interfaces.items()}


def _addr(address, family=socket.AF_INET):
    return SimpleNamespace(family=family, address=address)


class TestClassifyInterface:
    """Interface name to transport mapping."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("wlan0", ConnectivityResult.WIFI),
            ("wlp3s0", ConnectivityResult.WIFI),
            ("Wi-Fi", ConnectivityResult.WIFI),
            ("rmnet_data0", ConnectivityResult.MOBILE),
            ("wwan0", ConnectivityResult.MOBILE),
            ("eth0", ConnectivityResult.ETHERNET),
            ("enp0s31f6", ConnectivityResult.ETHERNET),
            ("Ethernet", ConnectivityResult.ETHERNET),
            ("tun0", ConnectivityResult.VPN),
            ("utun3", ConnectivityResult.VPN),
            ("wg0", ConnectivityResult.VPN),
            ("bnep0", ConnectivityResult.BLUETOOTH),
            ("docker0", ConnectivityResult.OTHER),
        ],
    )
    def test_known_names(self, name, expected):
        assert classify_interface(name) == expected

    def test_loopback_is_ignored(self):
        assert classify_interface("lo") is None
        assert classify_interface("Loopback Pseudo-Interface 1") is None


class TestDetect:
    """Primary transport detection."""

    def _detect(self, stats, addrs):
        with patch("netaware.services.platform_connectivity.psutil.net_if_stats", return_value=stats), patch(
            "netaware.services.platform_connectivity.psutil.net_if_addrs", return_value=addrs
        ):
            return PsutilConnectivityBackend.detect()

    def test_wifi_preferred_over_ethernet(self):
        result = self._detect(
            _stats(eth0=True, wlan0=True),
            {"eth0": [_addr("10.0.0.2")], "wlan0": [_addr("192.168.1.5")]},
        )
        assert result == ConnectivityResult.WIFI

    def test_down_interface_is_skipped(self):
        result = self._detect(
            _stats(wlan0=False, eth0=True),
            {"wlan0": [_addr("192.168.1.5")], "eth0": [_addr("10.0.0.2")]},
        )
        assert result == ConnectivityResult.ETHERNET

    def test_interface_without_routable_address_is_skipped(self):
        result = self._detect(
            _stats(wlan0=True, lo=True),
            {
                "wlan0": [_addr("fe80::1", socket.AF_INET6), _addr("169.254.3.4")],
                "lo": [_addr("127.0.0.1")],
            },
        )
        assert result == ConnectivityResult.NONE

    def test_vpn_only(self):
        result = self._detect(_stats(tun0=True), {"tun0": [_addr("10.8.0.2")]})
        assert result == ConnectivityResult.VPN

    def test_no_interfaces(self):
        assert self._detect({}, {}) == ConnectivityResult.NONE


class TestPolling:
    """Change publication."""

    @pytest.mark.asyncio
    async def test_check_connectivity_runs_detect(self):
        backend = PsutilConnectivityBackend()
        with patch.object(PsutilConnectivityBackend, "detect", return_value=ConnectivityResult.MOBILE):
            assert await backend.check_connectivity() == ConnectivityResult.MOBILE

    @pytest.mark.asyncio
    async def test_publishes_only_changes(self):
        state = {"value": ConnectivityResult.WIFI}
        backend = PsutilConnectivityBackend(poll_interval=0.01)
        received = []
        changed = asyncio.Event()

        def on_change(result):
            received.append(result)
            changed.set()

        backend.on_connectivity_changed.listen(on_change)

        with patch.object(PsutilConnectivityBackend, "detect", side_effect=lambda: state["value"]):
            backend.start()
            await asyncio.sleep(0.05)
            assert received == []

            state["value"] = ConnectivityResult.NONE
            await asyncio.wait_for(changed.wait(), timeout=2.0)
            await asyncio.sleep(0.05)
            backend.stop()

        assert received == [ConnectivityResult.NONE]

    @pytest.mark.asyncio
    async def test_poll_errors_do_not_stop_polling(self):
        calls = {"count": 0}

        def flaky():
            calls["count"] += 1
            if calls["count"] == 1:
                raise OSError("interface table unavailable")
            return ConnectivityResult.WIFI

        backend = PsutilConnectivityBackend(poll_interval=0.01)
        with patch.object(PsutilConnectivityBackend, "detect", side_effect=flaky):
            backend.start()
            await asyncio.sleep(0.1)
            assert backend.is_running is True
            backend.stop()

        assert calls["count"] > 1

    @pytest.mark.asyncio
    async def test_start_and_stop_are_idempotent(self):
        backend = PsutilConnectivityBackend(poll_interval=0.01)
        with patch.object(PsutilConnectivityBackend, "detect", return_value=ConnectivityResult.WIFI):
            backend.start()
            task = backend._task
            backend.start()
            assert backend._task is task

            backend.stop()
            backend.stop()

        assert backend.is_running is False

    @pytest.mark.asyncio
    async def test_snapshot_sets_baseline_for_first_poll(self):
        results = iter([ConnectivityResult.WIFI])
        backend = PsutilConnectivityBackend(poll_interval=0.01)
        received = []
        backend.on_connectivity_changed.listen(received.append)

        with patch.object(
            PsutilConnectivityBackend, "detect", side_effect=lambda: next(results, ConnectivityResult.NONE)
        ):
            assert await backend.check_connectivity() == ConnectivityResult.WIFI
            backend.start()
            await asyncio.sleep(0.1)
            backend.stop()

        assert received == [ConnectivityResult.NONE]

    @pytest.mark.asyncio
    async def test_service_follows_change_between_snapshot_and_first_poll(self):
        results = iter([ConnectivityResult.WIFI])
        backend = PsutilConnectivityBackend(poll_interval=0.01)
        service = ConnectivityService(backend)

        with patch.object(
            PsutilConnectivityBackend, "detect", side_effect=lambda: next(results, ConnectivityResult.NONE)
        ):
            await service.init()
            assert service.has_active_connection is True

            backend.start()
            await asyncio.sleep(0.2)
            backend.stop()

        assert service.has_active_connection is False
        service.dispose()
