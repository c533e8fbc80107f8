"""Book shelf and per-book reading progress."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from .models import BookRecord, ProgressEntry
from .store import BOOKS_KEY, PROGRESS_KEY, WriteQueue, load_json

log = logging.getLogger(__name__)


class Library:
    def __init__(self, queue: WriteQueue) -> None:
        self._queue = queue
        self._books: list[BookRecord] = []
        self._progress: dict[str, ProgressEntry] = {}

    def load(self) -> None:
        store = self._queue.store
        books = load_json(store, BOOKS_KEY, list) or []
        progress = load_json(store, PROGRESS_KEY, dict) or {}

        self._books = []
        seen: set[str] = set()
        for raw in books:
            if not isinstance(raw, dict):
                continue
            record = BookRecord.from_dict(raw)
            if record.id in seen:
                continue
            seen.add(record.id)
            self._books.append(record)

        self._progress = {
            book_id: ProgressEntry.from_dict(entry)
            for book_id, entry in progress.items()
            if isinstance(entry, dict)
        }
        log.info("Loaded %d books", len(self._books))

    # ── Books ──────────────────────────────────────────────

    @property
    def books(self) -> list[BookRecord]:
        return list(self._books)

    def get_book(self, book_id: str) -> Optional[BookRecord]:
        for book in self._books:
            if book.id == book_id:
                return book
        return None

    def add_book(self, record: BookRecord) -> bool:
        """Append a record unless one with the same id exists."""
        if self.get_book(record.id) is not None:
            return False
        self._books.append(record)
        return True

    def remove_book(self, book_id: str) -> None:
        self._books = [b for b in self._books if b.id != book_id]
        self._progress.pop(book_id, None)
        self.save_books()
        self.save_all_progress()

    def save_books(self) -> None:
        self._queue.submit(BOOKS_KEY, [b.to_dict() for b in self._books])

    # ── Reading Progress ───────────────────────────────────

    def get_progress(self, book_id: str) -> Optional[ProgressEntry]:
        return self._progress.get(book_id)

    def save_progress(self, book_id: str, line: int) -> None:
        self._progress[book_id] = ProgressEntry(
            line=line, last_read=datetime.now().isoformat(timespec="seconds")
        )
        self.save_all_progress()

    def save_all_progress(self) -> None:
        self._queue.submit(
            PROGRESS_KEY, {k: v.to_dict() for k, v in self._progress.items()}
        )
