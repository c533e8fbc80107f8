"""Auto-hide controller for the overlay window."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from glimpse.overlay.host import PointerSource, WindowHost
from glimpse.scheduling import Scheduler, Timer

log = logging.getLogger(__name__)

POLL_INTERVAL = 0.1  # seconds


@dataclass
class VisibilityState:
    pointer_inside: bool = False
    menu_open: bool = False
    paused_external: bool = False
    auto_hide_enabled: bool = False
    visible: bool = True


class VisibilityController:
    """Decides when the overlay is shown or hidden.

    The pointer is polled every ``poll_interval`` while auto-hide is enabled.
    The window is shown as soon as the pointer is over it and hidden once the
    pointer is elsewhere, unless a menu is open or hiding is paused.
    """

    def __init__(
        self,
        window: WindowHost,
        pointer: PointerSource,
        scheduler: Scheduler,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self._window = window
        self._pointer = pointer
        self._scheduler = scheduler
        self._poll_interval = poll_interval
        self._timer: Optional[Timer] = None
        self._disposed = False
        self.state = VisibilityState()

    @property
    def visible(self) -> bool:
        return self.state.visible

    @property
    def polling(self) -> bool:
        return self._timer is not None

    def set_auto_hide_enabled(self, enabled: bool) -> None:
        if self._disposed:
            return
        self.state.auto_hide_enabled = enabled
        if enabled:
            if self._timer is None:
                self._timer = self._scheduler.set_interval(
                    self._poll_interval, self.tick
                )
            return
        self._stop_polling()
        was_visible = self.state.visible
        self.state.visible = True
        if not was_visible:
            self._window.show()

    def set_menu_open(self, menu_open: bool) -> None:
        self.state.menu_open = menu_open

    def set_paused_external(self, paused: bool) -> None:
        self.state.paused_external = paused

    def tick(self) -> None:
        if self._disposed or self._timer is None:
            return
        state = self.state
        position = self._pointer.get_cursor_screen_position()
        state.pointer_inside = (
            position is not None and self._window.get_bounds().contains(position)
        )
        if state.pointer_inside:
            if not state.visible:
                state.visible = True
                log.debug("Pointer entered overlay, showing")
                self._window.show()
        elif (
            state.auto_hide_enabled
            and state.visible
            and not state.menu_open
            and not state.paused_external
        ):
            state.visible = False
            log.debug("Pointer left overlay, hiding")
            self._window.hide()

    def show(self) -> None:
        if self._disposed:
            return
        self.state.visible = True
        self._window.show()

    def hide(self) -> None:
        if self._disposed:
            return
        self.state.visible = False
        self._window.hide()

    def dispose(self) -> None:
        self._stop_polling()
        self._disposed = True

    def _stop_polling(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
