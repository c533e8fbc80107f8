"""The reading session: one open book, its cursor, search and progress."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

from glimpse.files import LoadedText, load_text_file
from glimpse.library.models import BookRecord, OpenBookState, SearchHit
from glimpse.library.shelf import Library
from glimpse.reading.segmenter import segment_lines, split_lines
from glimpse.reading.timer import TimeAccumulator

log = logging.getLogger(__name__)

Loader = Callable[[Union[str, Path]], Optional[LoadedText]]


class ReadingSession:
    def __init__(
        self,
        library: Library,
        timer: TimeAccumulator,
        loader: Loader = load_text_file,
    ) -> None:
        self._library = library
        self._timer = timer
        self._loader = loader
        self.book: Optional[OpenBookState] = None

    @property
    def is_open(self) -> bool:
        return self.book is not None

    @property
    def cursor_line(self) -> int:
        return self.book.cursor_line if self.book else 0

    @property
    def progress_percent(self) -> int:
        if not self.book:
            return 0
        return round(self.book.cursor_line / self.book.total_lines * 100)

    # ── Open / Close ───────────────────────────────

    def open(self, path: Union[str, Path]) -> Optional[OpenBookState]:
        loaded = self._loader(path)
        if loaded is None:
            return None
        return self.open_document(loaded)

    def open_document(self, loaded: LoadedText) -> OpenBookState:
        if self.book is not None:
            self.close()

        lines = split_lines(loaded.content)
        chapters = segment_lines(lines)
        book_id = BookRecord.make_id(loaded.path)

        self._library.add_book(
            BookRecord(
                id=book_id,
                path=loaded.path,
                display_name=loaded.display_name or "Unknown",
                added_at=time.time(),
            )
        )

        progress = self._library.get_progress(book_id)
        book = OpenBookState(
            id=book_id,
            path=loaded.path,
            display_name=loaded.display_name or "Unknown",
            lines=tuple(lines),
            chapters=tuple(chapters),
        )
        book.cursor_line = book.clamp(progress.line if progress else 0)
        self.book = book

        self._timer.start(book_id)
        self._library.save_books()
        log.info(
            "Opened %s: %d lines, %d chapters, at line %d",
            loaded.path,
            book.total_lines,
            len(chapters),
            book.cursor_line,
        )
        return book

    def close(self) -> None:
        if self.book is None:
            return
        self._timer.stop()
        log.info("Closed %s", self.book.path)
        self.book = None

    # ── Navigation ─────────────────────────────────

    def next_page(self, n: int = 1) -> None:
        if self.book:
            self.go_to_line(self.book.cursor_line + n)

    def prev_page(self, n: int = 1) -> None:
        if self.book:
            self.go_to_line(self.book.cursor_line - n)

    def go_to_line(self, line: int) -> None:
        if not self.book:
            return
        self.book.cursor_line = self.book.clamp(line)
        self._library.save_progress(self.book.id, self.book.cursor_line)

    def go_to_chapter(self, index: int) -> None:
        if not self.book:
            return
        if 0 <= index < len(self.book.chapters):
            self.go_to_line(self.book.chapters[index].line_index)

    def current_chapter_index(self) -> Optional[int]:
        if not self.book:
            return None
        current: Optional[int] = None
        for i, chapter in enumerate(self.book.chapters):
            if chapter.line_index > self.book.cursor_line:
                break
            current = i
        return current

    def visible_lines(self, count: int) -> list[str]:
        if not self.book:
            return []
        start = self.book.cursor_line
        return list(self.book.lines[start : start + max(0, count)])

    # ── Search ─────────────────────────────────────

    def search(self, keyword: str) -> list[SearchHit]:
        if not self.book or not keyword:
            return []
        needle = keyword.casefold()
        return [
            SearchHit(line_index=i, text=line)
            for i, line in enumerate(self.book.lines)
            if needle in line.casefold()
        ]
