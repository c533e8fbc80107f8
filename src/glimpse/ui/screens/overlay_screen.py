from __future__ import annotations

from typing import TYPE_CHECKING

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Static

from glimpse.ui.screens.menus import (
    FilePickerScreen,
    SearchScreen,
    ShelfScreen,
    StatisticsScreen,
    TocScreen,
)

if TYPE_CHECKING:
    from glimpse.app import GlimpseApp


class OverlayScreen(Screen):
    BINDINGS = [
        Binding("right", "next_page", "→"),
        Binding("left", "prev_page", "←"),
        Binding("space", "next_page", "Next", show=False),
        Binding("down", "next_page", "Next", show=False),
        Binding("up", "prev_page", "Prev", show=False),
        Binding("full_stop", "next_chapter", "Ch>"),
        Binding("comma", "prev_chapter", "<Ch"),
        Binding("o", "open_file", "Open"),
        Binding("b", "show_shelf", "Books"),
        Binding("t", "show_toc", "TOC"),
        Binding("slash", "search", "Find"),
        Binding("s", "show_stats", "Stats"),
        Binding("a", "toggle_auto_hide", "AutoHide"),
        Binding("p", "toggle_pause", "Pin"),
        Binding("r", "toggle_auto_scroll", "Scroll"),
        Binding("=", "more_lines", "+Ln", show=False),
        Binding("minus", "fewer_lines", "-Ln", show=False),
        Binding("right_square_bracket", "more_opacity", "+Op", show=False),
        Binding("left_square_bracket", "less_opacity", "-Op", show=False),
        Binding("q", "quit_app", "Quit"),
    ]

    @property
    def gl(self) -> GlimpseApp:
        return self.app  # type: ignore[return-value]

    def compose(self) -> ComposeResult:
        with Vertical(id="overlay-panel"):
            yield Static("", id="overlay-text")
            yield Static("", id="overlay-status")

    def on_mount(self) -> None:
        self.gl.window.attach(self.query_one("#overlay-panel"))
        self.render_lines()

    def render_lines(self) -> None:
        session = self.gl.session
        count = self.gl.settings.settings.display_lines
        text = self.query_one("#overlay-text", Static)
        status = self.query_one("#overlay-status", Static)

        book = session.book
        if book is None:
            text.update("\n".join(["Press o to open a text file"] + [""] * (count - 1)))
            status.update("")
            return

        lines = session.visible_lines(count)
        lines += [""] * (count - len(lines))
        text.update("\n".join(lines))

        parts = [book.display_name]
        chapter_idx = session.current_chapter_index()
        if chapter_idx is not None:
            parts.append(book.chapters[chapter_idx].title)
        parts.append(f"{book.cursor_line + 1}/{book.total_lines}")
        parts.append(f"{session.progress_percent}%")
        if self.gl.autohide.state.paused_external:
            parts.append("PINNED")
        status.update("  │  ".join(parts))

    # ── Pointer ────────────────────────────────────

    def on_mouse_move(self, event: events.MouseMove) -> None:
        self.gl.window.track(event.screen_x, event.screen_y)

    def on_click(self, event: events.Click) -> None:
        if self.gl.settings.settings.click_to_next_page:
            self.action_next_page()

    # ── Page Navigation ────────────────────────────

    def action_next_page(self) -> None:
        self.gl.session.next_page(self.gl.settings.settings.display_lines)
        self.render_lines()

    def action_prev_page(self) -> None:
        self.gl.session.prev_page(self.gl.settings.settings.display_lines)
        self.render_lines()

    def action_next_chapter(self) -> None:
        session = self.gl.session
        current = session.current_chapter_index()
        session.go_to_chapter(0 if current is None else current + 1)
        self.render_lines()

    def action_prev_chapter(self) -> None:
        session = self.gl.session
        current = session.current_chapter_index()
        if current is not None:
            session.go_to_chapter(current - 1)
        self.render_lines()

    # ── Menus ──────────────────────────────────────

    def action_open_file(self) -> None:
        self.gl.open_menu(
            FilePickerScreen(self.gl.config.start_dir), self._on_file_chosen
        )

    def action_show_shelf(self) -> None:
        self.gl.open_menu(ShelfScreen(), self._on_file_chosen)

    def _on_file_chosen(self, path: str | None) -> None:
        if path:
            self.gl.open_path(path)

    def action_show_toc(self) -> None:
        book = self.gl.session.book
        if book is None:
            return
        self.gl.open_menu(
            TocScreen(book.chapters, self.gl.session.current_chapter_index()),
            self._on_chapter_chosen,
        )

    def _on_chapter_chosen(self, index: int | None) -> None:
        if index is not None:
            self.gl.session.go_to_chapter(index)
            self.render_lines()

    def action_search(self) -> None:
        if self.gl.session.book is None:
            return
        self.gl.open_menu(SearchScreen(), self._on_hit_chosen)

    def _on_hit_chosen(self, line: int | None) -> None:
        if line is not None:
            self.gl.session.go_to_line(line)
            self.render_lines()

    def action_show_stats(self) -> None:
        self.gl.open_menu(StatisticsScreen())

    # ── Settings ───────────────────────────────────

    def action_toggle_auto_hide(self) -> None:
        settings = self.gl.settings
        enabled = not settings.settings.auto_hide_on_mouse_leave
        settings.update("auto_hide_on_mouse_leave", enabled)
        self.notify(f"Auto-hide {'on' if enabled else 'off'}")

    def action_toggle_pause(self) -> None:
        visibility = self.gl.autohide
        visibility.set_paused_external(not visibility.state.paused_external)
        self.render_lines()

    def action_toggle_auto_scroll(self) -> None:
        settings = self.gl.settings
        settings.update("auto_scroll", not settings.settings.auto_scroll)
        self.gl.sync_auto_scroll()

    def action_more_lines(self) -> None:
        settings = self.gl.settings
        settings.update("display_lines", settings.settings.display_lines + 1)
        self.render_lines()

    def action_fewer_lines(self) -> None:
        settings = self.gl.settings
        settings.update("display_lines", settings.settings.display_lines - 1)
        self.render_lines()

    def action_more_opacity(self) -> None:
        settings = self.gl.settings
        settings.update("opacity", settings.settings.opacity + 10)

    def action_less_opacity(self) -> None:
        settings = self.gl.settings
        settings.update("opacity", settings.settings.opacity - 10)

    async def action_quit_app(self) -> None:
        await self.gl.action_quit()
