"""Core types and enums."""
from enum import Enum


class ConnectivityResult(Enum):
    """Transport reported by a platform connectivity backend."""

    MOBILE = "mobile"
    WIFI = "wifi"
    ETHERNET = "ethernet"
    BLUETOOTH = "bluetooth"
    VPN = "vpn"
    OTHER = "other"
    NONE = "none"

    def __str__(self):
        return self.value


# Direct general-purpose transports. Everything else collapses to "unusable".
USABLE_TRANSPORTS = frozenset({ConnectivityResult.MOBILE, ConnectivityResult.WIFI})
