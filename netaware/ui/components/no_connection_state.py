"""No-connection fallback shown while the device has no usable network."""

from typing import Callable

import flet as ft
from loguru import logger


class NoConnectionState(ft.Container):
    """
    Fallback content with a manual retry action.

    Back gestures are handled by ``ReloadCoordinator.handle_back()``, which
    exits the application while this view is shown.
    """

    def __init__(self, on_retry: Callable[[], object]):
        super().__init__()
        self._on_retry = on_retry

        self._retry_button = ft.OutlinedButton(
            "Retry",
            icon=ft.Icons.REFRESH,
            on_click=self._handle_retry,
        )

        self.content = ft.Column(
            [
                ft.Icon(ft.Icons.WIFI_OFF, color=ft.Colors.ORANGE_400, size=48),
                ft.Text(
                    "No active connection",
                    size=16,
                    weight=ft.FontWeight.W_500,
                    text_align=ft.TextAlign.CENTER,
                ),
                ft.Container(height=20),
                self._retry_button,
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=8,
        )
        self.expand = True

    def _handle_retry(self, e):
        logger.debug("[NoConnectionState] Retry clicked")
        self._on_retry()

