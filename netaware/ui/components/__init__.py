"""Reusable flet components."""

from netaware.ui.components.no_connection_state import NoConnectionState

__all__ = ["NoConnectionState"]
