"""Dependency Injection Container for netaware."""
from dependency_injector import containers, providers
from loguru import logger

from netaware.core.constants import DEDUPLICATE_VERDICTS, POLL_INTERVAL
from netaware.services.connectivity_service import ConnectivityService
from netaware.services.platform_connectivity import PsutilConnectivityBackend
from netaware.services.reload_coordinator import ReloadCoordinator


class ApplicationContainer(containers.DeclarativeContainer):
    """DI Container for application-wide dependencies."""

    # ═══════════════════════════════════════════════════════════
    # SINGLETONS - One backend, one signal per process
    # ═══════════════════════════════════════════════════════════

    connectivity_backend = providers.Singleton(
        PsutilConnectivityBackend,
        poll_interval=POLL_INTERVAL,
    )

    connectivity_service = providers.Singleton(
        ConnectivityService,
        backend=connectivity_backend,
        distinct=DEDUPLICATE_VERDICTS,
    )

    # ═══════════════════════════════════════════════════════════
    # FACTORIES - One coordinator per consumer
    # ═══════════════════════════════════════════════════════════

    reload_coordinator = providers.Factory(
        ReloadCoordinator,
        signal=connectivity_service,
    )


async def start_connectivity(container: ApplicationContainer) -> ConnectivityService:
    """
    Bootstrap: start the platform backend and initialize the shared signal.

    Raises BackendUnavailable when the initial query fails; the backend is
    stopped again before the error propagates.
    """
    backend = container.connectivity_backend()
    backend.start()

    service = container.connectivity_service()
    try:
        await service.init()
    except Exception:
        backend.stop()
        raise

    logger.info("[Bootstrap] Connectivity started")
    return service


def stop_connectivity(container: ApplicationContainer) -> None:
    """Teardown counterpart of start_connectivity. Safe to call more than once."""
    container.connectivity_service().dispose()
    container.connectivity_backend().stop()
    logger.info("[Bootstrap] Connectivity stopped")
