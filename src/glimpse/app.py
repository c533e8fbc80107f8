"""Glimpse - a terminal overlay reader for plain-text books."""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Optional

from textual import events
from textual.app import App
from textual.screen import Screen
from textual.timer import Timer

from glimpse.config import AppConfig, load_config
from glimpse.library.shelf import Library
from glimpse.library.store import open_store
from glimpse.overlay.visibility import VisibilityController
from glimpse.reading.session import ReadingSession
from glimpse.reading.timer import TimeAccumulator
from glimpse.settings import SettingsManager
from glimpse.ui.host import TerminalWindow
from glimpse.ui.screens.overlay_screen import OverlayScreen
from glimpse.ui.themes import APP_CSS

log = logging.getLogger(__name__)


class GlimpseApp(App):
    """A few lines of a book at a time, out of the way when not in use."""

    TITLE = "Glimpse"
    CSS = APP_CSS

    def __init__(
        self, config: AppConfig | None = None, open_file: str | None = None
    ) -> None:
        super().__init__()
        self.config = config or load_config()
        self.store, self.queue = open_store(self.config.store_path)
        self.library = Library(self.queue)
        self.accumulator = TimeAccumulator(self.queue, self)
        self.session = ReadingSession(self.library, self.accumulator)
        self.window = TerminalWindow()
        self.autohide = VisibilityController(self.window, self.window, self)
        self.settings = SettingsManager(self.queue, self.window, self.autohide)
        self.overlay = OverlayScreen()
        self._open_file = open_file
        self._auto_scroll: Optional[Timer] = None

    def on_mount(self) -> None:
        self.library.load()
        self.accumulator.load()
        self.settings.load()
        self.sync_auto_scroll()
        if self._open_file:
            self.open_path(self._open_file)
        self.push_screen(self.overlay)

    def open_path(self, path: str) -> None:
        try:
            book = self.session.open(path)
        except OSError as e:
            log.warning("Could not open %s: %s", path, e)
            self.notify(f"Error opening: {e}", severity="error")
            return
        if book is None:
            self.notify(f"File not found: {path}", severity="warning")
            return
        if self.overlay.is_mounted:
            self.overlay.render_lines()

    def open_menu(
        self, screen: Screen[Any], callback: Callable[[Any], None] | None = None
    ) -> None:
        """Show a modal menu; auto-hide is held off until it is dismissed."""
        self.autohide.set_menu_open(True)

        def _closed(result: Any) -> None:
            self.autohide.set_menu_open(False)
            if callback is not None:
                callback(result)

        self.push_screen(screen, _closed)

    def sync_auto_scroll(self) -> None:
        if self._auto_scroll is not None:
            self._auto_scroll.stop()
            self._auto_scroll = None
        s = self.settings.settings
        if s.auto_scroll:
            self._auto_scroll = self.set_interval(
                s.auto_scroll_interval, self._auto_scroll_step
            )

    def _auto_scroll_step(self) -> None:
        if self.session.is_open and not self.autohide.state.menu_open:
            self.session.next_page(self.settings.settings.display_lines)
            if self.overlay.is_mounted:
                self.overlay.render_lines()

    def on_app_blur(self, event: events.AppBlur) -> None:
        self.window.forget()
        self.accumulator.pause()

    def on_app_focus(self, event: events.AppFocus) -> None:
        self.accumulator.resume()

    async def action_quit(self) -> None:
        self.session.close()
        self.autohide.dispose()
        await self.queue.drain()
        self.store.close()
        self.exit()


def _setup_logging(config: AppConfig) -> None:
    handler = logging.FileHandler(config.log_path, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root = logging.getLogger("glimpse")
    root.setLevel(config.log_level)
    root.addHandler(handler)


def main() -> None:
    config = load_config()
    _setup_logging(config)

    open_file: str | None = None
    if len(sys.argv) > 1:
        open_file = sys.argv[1]

    app = GlimpseApp(config=config, open_file=open_file)
    app.run()


if __name__ == "__main__":
    main()
