from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    DataTable,
    DirectoryTree,
    Input,
    Label,
    ListItem,
    ListView,
    Static,
)

from glimpse.files import TEXT_EXTENSIONS
from glimpse.library.models import Chapter, SearchHit, format_duration

if TYPE_CHECKING:
    from glimpse.app import GlimpseApp


class TextDirectoryTree(DirectoryTree):
    def filter_paths(self, paths: Iterable[Path]) -> Iterable[Path]:
        return sorted(
            [p for p in paths if p.is_dir() or p.suffix.lower() in TEXT_EXTENSIONS],
            key=lambda p: (not p.is_dir(), p.name.lower()),
        )


class FilePickerScreen(ModalScreen[str | None]):
    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    DEFAULT_CSS = """
    FilePickerScreen {
        align: center middle;
    }
    #file-picker-buttons {
        align: center middle;
        height: 3;
    }
    """

    def __init__(self, start_path: str = "~") -> None:
        super().__init__()
        self._start = str(Path(start_path).expanduser().resolve())

    def compose(self) -> ComposeResult:
        with Vertical(classes="menu-dialog"):
            yield Label("Open a text file", classes="menu-title")
            yield TextDirectoryTree(self._start, id="file-tree", classes="menu-list")
            with Horizontal(id="file-picker-buttons"):
                yield Button("Cancel [Esc]", variant="default", id="fp-cancel")

    def on_mount(self) -> None:
        self.query_one("#file-tree", TextDirectoryTree).focus()

    @on(DirectoryTree.FileSelected)
    def on_file_selected(self, event: DirectoryTree.FileSelected) -> None:
        self.dismiss(str(event.path))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "fp-cancel":
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class TocScreen(ModalScreen[int | None]):
    """Chapter list; dismisses with the chosen chapter index."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    DEFAULT_CSS = """
    TocScreen {
        align: center middle;
    }
    """

    def __init__(self, chapters: tuple[Chapter, ...], current: int | None) -> None:
        super().__init__()
        self._chapters = chapters
        self._current = current

    def compose(self) -> ComposeResult:
        with Vertical(classes="menu-dialog"):
            yield Label("Contents", classes="menu-title")
            yield ListView(
                *[
                    ListItem(Static(ch.title), classes="toc-item")
                    for ch in self._chapters
                ],
                id="toc-list",
                classes="menu-list",
            )
            if not self._chapters:
                yield Static("No chapters detected", classes="menu-hint")

    def on_mount(self) -> None:
        toc = self.query_one("#toc-list", ListView)
        if self._current is not None:
            toc.index = self._current
        toc.focus()

    @on(ListView.Selected, "#toc-list")
    def on_toc_selected(self, event: ListView.Selected) -> None:
        self.dismiss(event.list_view.index)

    def action_cancel(self) -> None:
        self.dismiss(None)


class SearchScreen(ModalScreen[int | None]):
    """Keyword search; dismisses with the line index of the chosen hit."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    DEFAULT_CSS = """
    SearchScreen {
        align: center middle;
    }
    """

    MAX_LISTED = 500

    def __init__(self) -> None:
        super().__init__()
        self._hits: list[SearchHit] = []

    @property
    def gl(self) -> GlimpseApp:
        return self.app  # type: ignore[return-value]

    def compose(self) -> ComposeResult:
        with Vertical(classes="menu-dialog"):
            yield Label("Search", classes="menu-title")
            yield Input(placeholder="Keyword... (Enter to search)", id="search-input")
            yield ListView(id="search-results", classes="menu-list")
            yield Static("", id="search-summary", classes="menu-hint")

    def on_mount(self) -> None:
        self.query_one("#search-input", Input).focus()

    @on(Input.Submitted, "#search-input")
    def on_search_submitted(self, event: Input.Submitted) -> None:
        self._hits = self.gl.session.search(event.value)
        results = self.query_one("#search-results", ListView)
        results.clear()
        for hit in self._hits[: self.MAX_LISTED]:
            text = hit.text.strip()
            results.append(ListItem(Static(f"{hit.line_index + 1:>6}  {text[:80]}")))
        summary = f"{len(self._hits)} matches"
        if len(self._hits) > self.MAX_LISTED:
            summary += f" (showing first {self.MAX_LISTED})"
        self.query_one("#search-summary", Static).update(summary)
        if self._hits:
            results.focus()

    @on(ListView.Selected, "#search-results")
    def on_result_selected(self, event: ListView.Selected) -> None:
        index = event.list_view.index
        if index is not None and index < len(self._hits):
            self.dismiss(self._hits[index].line_index)

    def action_cancel(self) -> None:
        self.dismiss(None)


class StatisticsScreen(ModalScreen[None]):
    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("s", "close", "Close", show=False),
    ]

    DEFAULT_CSS = """
    StatisticsScreen {
        align: center middle;
    }
    StatisticsScreen .menu-dialog {
        height: auto;
    }
    """

    @property
    def gl(self) -> GlimpseApp:
        return self.app  # type: ignore[return-value]

    def compose(self) -> ComposeResult:
        accumulator = self.gl.accumulator
        stats = accumulator.stats
        rows = [
            f"Today:      {format_duration(stats.today_seconds)}",
            f"Total:      {format_duration(stats.total_seconds)}",
        ]
        book = self.gl.session.book
        if book is not None:
            rows.append(
                f"This book:  {format_duration(accumulator.book_seconds(book.id))}"
            )
        rows.append(f"Books:      {len(self.gl.library.books)}")
        with Vertical(classes="menu-dialog"):
            yield Label("Reading statistics", classes="menu-title")
            yield Static("\n".join(rows), id="stats-body")
            yield Static("Esc to close", classes="menu-hint")

    def action_close(self) -> None:
        self.dismiss(None)


class ShelfScreen(ModalScreen[str | None]):
    """Books opened before; dismisses with the path of the one to reopen."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("d", "remove_book", "Remove"),
    ]

    DEFAULT_CSS = """
    ShelfScreen {
        align: center middle;
    }
    """

    @property
    def gl(self) -> GlimpseApp:
        return self.app  # type: ignore[return-value]

    def compose(self) -> ComposeResult:
        with Vertical(classes="menu-dialog"):
            yield Label("Books", classes="menu-title")
            yield DataTable(id="shelf-table", classes="menu-list")
            yield Static("Enter to open, d to remove, Esc to close", classes="menu-hint")

    def on_mount(self) -> None:
        table = self.query_one("#shelf-table", DataTable)
        table.cursor_type = "row"
        table.add_columns("Title", "Line", "Read")
        self._refresh_books()
        table.focus()

    def _refresh_books(self) -> None:
        table = self.query_one("#shelf-table", DataTable)
        table.clear()
        library = self.gl.library
        for book in reversed(library.books):
            progress = library.get_progress(book.id)
            table.add_row(
                book.display_name,
                str(progress.line + 1) if progress else "-",
                format_duration(self.gl.accumulator.book_seconds(book.id)),
                key=book.id,
            )

    @on(DataTable.RowSelected, "#shelf-table")
    def on_row_selected(self, event: DataTable.RowSelected) -> None:
        book = self.gl.library.get_book(str(event.row_key.value))
        if book:
            self.dismiss(book.path)

    def action_remove_book(self) -> None:
        table = self.query_one("#shelf-table", DataTable)
        if table.row_count == 0:
            return
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        book = self.gl.library.get_book(str(row_key.value))
        if book is None:
            return
        current = self.gl.session.book
        if current is not None and current.id == book.id:
            self.notify("Cannot remove the book being read", severity="warning")
            return
        self.gl.library.remove_book(book.id)
        self._refresh_books()
        self.notify(f"Removed: {book.display_name}")

    def action_cancel(self) -> None:
        self.dismiss(None)
