"""
Services subpackage - Connectivity signal and reload coordination.

- ConnectivityService: normalizes backend reports into a boolean verdict stream
- ReloadCoordinator: per-consumer reload-on-reconnect policy
- PsutilConnectivityBackend: interface-based platform backend
"""

from netaware.services.connectivity_service import ConnectivityService
from netaware.services.platform_connectivity import PsutilConnectivityBackend
from netaware.services.reload_coordinator import ReloadCoordinator

__all__ = [
    "ConnectivityService",
    "PsutilConnectivityBackend",
    "ReloadCoordinator",
]
