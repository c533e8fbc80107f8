"""Tests for the book shelf and progress map."""

from __future__ import annotations

from glimpse.library.models import BookRecord
from glimpse.library.shelf import Library
from glimpse.library.store import BOOKS_KEY, PROGRESS_KEY


def _record(path: str) -> BookRecord:
    return BookRecord(id=BookRecord.make_id(path), path=path, display_name=path[1:])


class TestBooks:
    def test_add_dedups_by_id(self, library: Library):
        assert library.add_book(_record("/a.txt")) is True
        assert library.add_book(_record("/a.txt")) is False
        assert len(library.books) == 1

    def test_order_preserved(self, library: Library):
        for p in ("/c.txt", "/a.txt", "/b.txt"):
            library.add_book(_record(p))
        assert [b.path for b in library.books] == ["/c.txt", "/a.txt", "/b.txt"]

    def test_get_book(self, library: Library):
        record = _record("/a.txt")
        library.add_book(record)
        assert library.get_book(record.id) == record
        assert library.get_book("nonexistent") is None

    def test_load_skips_duplicates_and_junk(self, store, queue):
        rec = _record("/a.txt").to_dict()
        store.set(BOOKS_KEY, [rec, rec, "junk", _record("/b.txt").to_dict()])
        library = Library(queue)
        library.load()
        assert [b.path for b in library.books] == ["/a.txt", "/b.txt"]

    def test_load_wrong_shape(self, store, queue):
        store.set(BOOKS_KEY, {"not": "a list"})
        store.set(PROGRESS_KEY, ["not", "a", "map"])
        library = Library(queue)
        library.load()
        assert library.books == []

    def test_load_tolerates_bad_fields(self, store, queue):
        rec = _record("/a.txt").to_dict()
        rec["addedAt"] = "recently"
        store.set(BOOKS_KEY, [rec])
        store.set(PROGRESS_KEY, {"a": {"line": None}, "b": {"line": 7}})
        library = Library(queue)
        library.load()
        assert [b.path for b in library.books] == ["/a.txt"]
        assert library.get_progress("a").line == 0
        assert library.get_progress("b").line == 7

    def test_remove_book(self, library: Library, store):
        record = _record("/a.txt")
        library.add_book(record)
        library.save_progress(record.id, 10)
        library.remove_book(record.id)
        assert library.books == []
        assert library.get_progress(record.id) is None
        assert store.get(BOOKS_KEY) == []
        assert store.get(PROGRESS_KEY) == {}


class TestProgress:
    def test_save_and_reload(self, library: Library, queue):
        library.save_progress("book-a", 12)
        library.save_progress("book-b", 3)

        reloaded = Library(queue)
        reloaded.load()
        assert reloaded.get_progress("book-a").line == 12
        assert reloaded.get_progress("book-b").line == 3

    def test_missing(self, library: Library):
        assert library.get_progress("nope") is None
