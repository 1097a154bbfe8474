"""CLI interface for netaware - Headless connectivity inspection.

This module never loads the Flet UI framework.

Usage:
    netaware-cli status
    netaware-cli watch --duration 30
    netaware-cli version
"""

import asyncio
from typing import Optional

import typer

from netaware.core.constants import APP_VERSION, DEDUPLICATE_VERDICTS, POLL_INTERVAL
from netaware.core.exceptions import BackendUnavailable
from netaware.core.logger import configure_cli_logging
from netaware.services.connectivity_service import ConnectivityService
from netaware.services.platform_connectivity import PsutilConnectivityBackend

# Create Typer app
app = typer.Typer(
    name="netaware-cli",
    help="netaware headless CLI - Inspect and watch connectivity verdicts",
    add_completion=False,
)


def _create_backend(poll_interval: float = POLL_INTERVAL):
    """Build the platform backend."""
    return PsutilConnectivityBackend(poll_interval=poll_interval)


def _format_verdict(verdict: bool) -> str:
    return "connected" if verdict else "disconnected"


@app.command()
def version():
    """Show version information."""
    typer.echo(f"netaware v{APP_VERSION}")


@app.command()
def status():
    """Query connectivity once and print the verdict."""
    configure_cli_logging()
    service = ConnectivityService(_create_backend())

    try:
        result = asyncio.run(service.check_transport())
    except BackendUnavailable as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(1)
    verdict = ConnectivityService.classify(result)

    typer.echo(f"Transport: {result}")
    typer.echo(f"Usable: {'yes' if verdict else 'no'}")


@app.command()
def watch(
    duration: Optional[float] = typer.Option(None, "--duration", "-d", help="Stop after this many seconds"),
    interval: float = typer.Option(POLL_INTERVAL, "--interval", "-i", help="Seconds between polls"),
    all_events: bool = typer.Option(False, "--all-events", help="Print repeated verdicts too"),
):
    """Print each connectivity verdict as it changes."""
    configure_cli_logging()
    backend = _create_backend(poll_interval=interval)
    service = ConnectivityService(backend, distinct=DEDUPLICATE_VERDICTS and not all_events)

    async def _watch():
        backend.start()
        try:
            await service.init()
            typer.echo(f"Initial: {_format_verdict(service.has_active_connection)}")
            subscription = service.on_connectivity_changed.listen(
                lambda verdict: typer.echo(f"Changed: {_format_verdict(verdict)}")
            )
            try:
                if duration is None:
                    await asyncio.Event().wait()
                else:
                    await asyncio.sleep(duration)
            finally:
                subscription.cancel()
        finally:
            service.dispose()
            backend.stop()

    try:
        asyncio.run(_watch())
    except BackendUnavailable as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo("Stopped")


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
