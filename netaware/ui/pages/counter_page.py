"""Counter page - Demo consumer of a ReloadCoordinator."""

import flet as ft
from loguru import logger

from netaware.services.reload_coordinator import ReloadCoordinator


class CounterPage(ft.Container):
    """
    Connection-aware counter.

    Attaches its coordinator on mount and detaches on unmount; the visible
    content is whatever ``coordinator.render()`` returns.
    """

    def __init__(self, coordinator: ReloadCoordinator, title: str = "netaware demo"):
        super().__init__()
        self._coordinator = coordinator
        self._title = title
        self.counter = 0
        self.load_count = 0
        self.expand = True

    # --- Flet lifecycle ---

    def did_mount(self):
        self._coordinator.attach(self)

    def will_unmount(self):
        self._coordinator.detach()

    # --- Consumer contract ---

    async def load_state(self):
        self.load_count += 1
        logger.debug(f"[CounterPage] Loaded state ({self.load_count})")
        self.request_render()

    def request_render(self):
        if not self._coordinator.is_attached:
            return
        self.content = self._coordinator.render()
        self.update()

    def build_page(self):
        return ft.Column(
            [
                ft.Text(self._title, size=20, weight=ft.FontWeight.BOLD),
                ft.Text("You have pushed the button this many times:"),
                ft.Text(str(self.counter), size=32, weight=ft.FontWeight.W_500),
                ft.FloatingActionButton(
                    icon=ft.Icons.ADD,
                    tooltip="Increment",
                    on_click=self._handle_increment,
                ),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=12,
        )

    def increment(self):
        self.counter += 1
        self.request_render()

    def _handle_increment(self, e):
        self.increment()
