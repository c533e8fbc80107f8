"""Terminal stand-ins for the overlay window and the screen pointer."""

from __future__ import annotations

import logging
from typing import Optional

from textual.widget import Widget

from glimpse.overlay.host import Bounds, Point

log = logging.getLogger(__name__)


class TerminalWindow:
    """Treats one widget as the overlay window.

    Hiding keeps the widget's region in the layout so the pointer can find it
    again. The pointer position is fed from mouse events by the screen.
    """

    def __init__(self) -> None:
        self._panel: Optional[Widget] = None
        self._visible = True
        self._opacity = 100
        self._always_on_top = True
        self._pointer: Optional[Point] = None

    def attach(self, panel: Widget) -> None:
        self._panel = panel
        panel.visible = self._visible
        panel.styles.opacity = self._opacity / 100

    # ── WindowHost ─────────────────────────────────

    def show(self) -> None:
        self._visible = True
        if self._panel is not None:
            self._panel.visible = True

    def hide(self) -> None:
        self._visible = False
        if self._panel is not None:
            self._panel.visible = False

    def is_visible(self) -> bool:
        return self._visible

    def get_bounds(self) -> Bounds:
        if self._panel is None:
            return Bounds(0, 0, 0, 0)
        region = self._panel.region
        return Bounds(region.x, region.y, region.width, region.height)

    def set_opacity(self, percent: int) -> None:
        self._opacity = percent
        if self._panel is not None:
            self._panel.styles.opacity = percent / 100

    def set_always_on_top(self, flag: bool) -> None:
        # A terminal has no window stacking to change.
        self._always_on_top = flag
        log.debug("always-on-top %s (no-op in a terminal)", flag)

    # ── PointerSource ──────────────────────────────

    def track(self, x: int, y: int) -> None:
        self._pointer = Point(x, y)

    def forget(self) -> None:
        self._pointer = None

    def get_cursor_screen_position(self) -> Optional[Point]:
        return self._pointer
