"""Data models for the shelf, reading progress, statistics and settings."""

from __future__ import annotations

import hashlib
import os
import time
from dataclasses import dataclass, field, fields
from typing import Any, Optional


def _as_int(value: Any, default: int = 0) -> int:
    """Coerce a stored number; anything unreadable becomes ``default``."""
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass
class BookRecord:
    id: str  # SHA256 of normalized path
    path: str
    display_name: str
    added_at: float = field(default_factory=time.time)

    @staticmethod
    def make_id(path: str) -> str:
        normalized = os.path.normcase(os.path.abspath(os.fspath(path)))
        return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:16]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "displayName": self.display_name,
            "addedAt": self.added_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BookRecord:
        path = str(data.get("path", ""))
        return cls(
            id=str(data.get("id") or cls.make_id(path)),
            path=path,
            display_name=str(data.get("displayName") or "Unknown"),
            added_at=_as_float(data.get("addedAt")),
        )


@dataclass(frozen=True)
class Chapter:
    """A heading detected in a document."""

    title: str
    line_index: int


@dataclass
class OpenBookState:
    """The currently loaded document and its reading cursor."""

    id: str
    path: str
    display_name: str
    lines: tuple[str, ...]
    chapters: tuple[Chapter, ...] = ()
    cursor_line: int = 0

    @property
    def total_lines(self) -> int:
        return len(self.lines)

    def clamp(self, line: int) -> int:
        return max(0, min(line, self.total_lines - 1))


@dataclass
class ProgressEntry:
    line: int = 0
    last_read: str = ""  # ISO 8601 timestamp

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line, "lastRead": self.last_read}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgressEntry:
        return cls(
            line=_as_int(data.get("line")),
            last_read=str(data.get("lastRead", "")),
        )


@dataclass
class StatisticsState:
    today_seconds: int = 0
    total_seconds: int = 0
    per_book_seconds: dict[str, int] = field(default_factory=dict)
    last_read_date: str = ""  # YYYY-MM-DD

    def to_dict(self) -> dict[str, Any]:
        return {
            "todaySeconds": self.today_seconds,
            "totalSeconds": self.total_seconds,
            "perBookSeconds": dict(self.per_book_seconds),
            "lastReadDate": self.last_read_date,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StatisticsState:
        per_book = data.get("perBookSeconds")
        if not isinstance(per_book, dict):
            per_book = {}
        return cls(
            today_seconds=_as_int(data.get("todaySeconds")),
            total_seconds=_as_int(data.get("totalSeconds")),
            per_book_seconds={str(k): _as_int(v) for k, v in per_book.items()},
            last_read_date=str(data.get("lastReadDate", "")),
        )


@dataclass
class Settings:
    display_lines: int = 2
    opacity: int = 90  # percent
    always_on_top: bool = True
    auto_hide_on_mouse_leave: bool = True
    click_to_next_page: bool = True
    auto_scroll: bool = False
    auto_scroll_interval: int = 5  # seconds

    _KEYS = {
        "display_lines": "displayLines",
        "opacity": "opacity",
        "always_on_top": "alwaysOnTop",
        "auto_hide_on_mouse_leave": "autoHideOnMouseLeave",
        "click_to_next_page": "clickToNextPage",
        "auto_scroll": "autoScroll",
        "auto_scroll_interval": "autoScrollInterval",
    }

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, name) for name, key in self._KEYS.items()}

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> Settings:
        settings = cls()
        if not data:
            return settings
        for f in fields(cls):
            key = cls._KEYS.get(f.name)
            if key and key in data:
                setattr(settings, f.name, data[key])
        return settings


@dataclass(frozen=True)
class SearchHit:
    line_index: int
    text: str


def format_duration(seconds: int) -> str:
    hours, rest = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
