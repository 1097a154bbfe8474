"""Main application entry point."""

import asyncio
import sys

from netaware.core.constants import APP_NAME
from netaware.core.logger import logger


async def main(page):
    """Flet session entry point."""
    from netaware.core.container import ApplicationContainer, start_connectivity, stop_connectivity
    from netaware.core.exceptions import BackendUnavailable
    from netaware.ui.pages.counter_page import CounterPage

    logger.debug("[Startup] Starting Flet session")
    page.title = APP_NAME
    page.window.width = 420
    page.window.height = 550

    # Initialize DI Container and the shared connectivity signal
    container = ApplicationContainer()
    try:
        await start_connectivity(container)
    except BackendUnavailable as e:
        logger.error(f"[Startup] Connectivity backend unavailable: {e}")
        await page.window.destroy()
        return

    coordinator = container.reload_coordinator(
        exit_app=lambda: page.run_task(page.window.destroy),
        task_runner=page.run_task,
    )

    def on_view_pop(e):
        if coordinator.handle_back() and len(page.views) > 1:
            page.views.pop()
            page.update()

    def on_disconnect(e):
        logger.debug("[Shutdown] Session disconnected")
        stop_connectivity(container)

    page.on_view_pop = on_view_pop
    page.on_disconnect = on_disconnect

    page.add(CounterPage(coordinator, title=APP_NAME))

    # Keep session alive
    try:
        while True:
            await asyncio.sleep(3600)
    except asyncio.CancelledError:
        logger.debug("[Shutdown] Flet session task cancelled")
        stop_connectivity(container)


def run():
    """Entry point for the console script - routes to GUI or CLI."""
    logger.info(f"[Startup] {APP_NAME} starting, argv={sys.argv}")

    # CLI mode - delegate to CLI handler (no Flet import)
    if len(sys.argv) > 1:
        from netaware.cli import main as cli_main

        cli_main()
        return

    # Lazy-import Flet here (only when GUI is actually needed)
    import flet as ft

    ft.app(target=main)


if __name__ == "__main__":
    run()
