"""netaware - Connectivity-aware reload coordination for flet applications."""

from netaware.core.constants import APP_VERSION

__version__ = APP_VERSION
__description__ = "Turns platform connectivity reports into a reload-on-reconnect lifecycle"

from netaware.core.exceptions import BackendUnavailable, LoadFailure
from netaware.core.types import ConnectivityResult
from netaware.services.connectivity_service import ConnectivityService
from netaware.services.reload_coordinator import ReloadCoordinator

__all__ = [
    "BackendUnavailable",
    "ConnectivityResult",
    "ConnectivityService",
    "LoadFailure",
    "ReloadCoordinator",
    "__version__",
]
