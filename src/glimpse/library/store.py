"""SQLite key-value store and the fire-and-forget write queue in front of it."""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
import threading
import time
from pathlib import Path
from typing import Any, Optional

log = logging.getLogger(__name__)

BOOKS_KEY = "books"
PROGRESS_KEY = "readingProgress"
STATISTICS_KEY = "statistics"
SETTINGS_KEY = "settings"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at REAL NOT NULL
);
"""


class KeyValueStore:
    """JSON values keyed by namespace name."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._lock = threading.Lock()
        self._init_schema()

    def _init_schema(self) -> None:
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            row = self._conn.execute(
                "SELECT value FROM kv WHERE key = ?", (key,)
            ).fetchone()
        if not row:
            return default
        try:
            return json.loads(row["value"])
        except ValueError:
            log.warning("Discarding unreadable value for %r", key)
            return default

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        with self._lock:
            self._conn.execute(
                """INSERT OR REPLACE INTO kv (key, value, updated_at)
                   VALUES (?, ?, ?)""",
                (key, payload, time.time()),
            )
            self._conn.commit()


class WriteQueue:
    """Non-blocking writes with last-submitted-wins ordering per key.

    Every submission gets a per-key sequence number. A write only lands if its
    number is newer than the last one applied for that key, so a slow stale
    write that completes late cannot overwrite a newer value. A write that
    fails still claims its number: the key keeps whatever was stored before,
    and nothing submitted earlier can land after it.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._seq: dict[str, int] = {}
        self._applied: dict[str, int] = {}
        self._lock = threading.Lock()
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def submit(self, key: str, value: Any) -> int:
        seq = self._seq.get(key, 0) + 1
        self._seq[key] = seq
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._apply(key, value, seq)
            return seq
        task = loop.create_task(self._write(key, value, seq))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return seq

    async def _write(self, key: str, value: Any, seq: int) -> None:
        await asyncio.to_thread(self._apply, key, value, seq)

    def _apply(self, key: str, value: Any, seq: int) -> bool:
        with self._lock:
            if seq <= self._applied.get(key, 0):
                log.debug("Skipping stale write %d for %r", seq, key)
                return False
            try:
                self._store.set(key, value)
            except (sqlite3.Error, OSError, TypeError, ValueError) as e:
                log.warning("Failed to persist %r: %s", key, e)
                return False
            finally:
                self._applied[key] = seq
            return True

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every outstanding write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))


def open_store(db_path: Path) -> tuple[KeyValueStore, WriteQueue]:
    store = KeyValueStore(db_path)
    return store, WriteQueue(store)


def load_json(store: KeyValueStore, key: str, expected: type) -> Optional[Any]:
    """Read a value, treating a value of the wrong shape as absent."""
    value = store.get(key)
    if value is None:
        return None
    if not isinstance(value, expected):
        log.warning("Ignoring %r: expected %s, got %s", key, expected.__name__, type(value).__name__)
        return None
    return value
