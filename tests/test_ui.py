"""Unit tests for flet UI components."""
from unittest.mock import MagicMock, Mock

import flet as ft

from netaware.ui.components.no_connection_state import NoConnectionState
from netaware.ui.pages.counter_page import CounterPage


class TestNoConnectionState:
    """Test suite for the no-connection fallback."""

    def test_is_a_container(self):
        view = NoConnectionState(on_retry=Mock())
        assert isinstance(view, ft.Container)

    def test_retry_invokes_callback(self):
        on_retry = Mock()
        view = NoConnectionState(on_retry=on_retry)

        view._handle_retry(None)

        on_retry.assert_called_once_with()

    def test_back_gesture_is_left_to_coordinator(self):
        view = NoConnectionState(on_retry=Mock())
        assert not hasattr(view, "handle_back")


class TestCounterPage:
    """Test suite for the demo consumer page."""

    def test_mount_and_unmount_drive_coordinator(self):
        coordinator = MagicMock()
        page = CounterPage(coordinator)

        page.did_mount()
        page.will_unmount()

        coordinator.attach.assert_called_once_with(page)
        coordinator.detach.assert_called_once_with()

    def test_build_page_returns_column(self):
        page = CounterPage(MagicMock())
        assert isinstance(page.build_page(), ft.Column)

    def test_increment_skips_render_when_detached(self):
        coordinator = MagicMock()
        coordinator.is_attached = False
        page = CounterPage(coordinator)

        page.increment()

        assert page.counter == 1
        coordinator.render.assert_not_called()
