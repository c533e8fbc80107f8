"""Shared fixtures for tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable, Optional

import pytest

from glimpse.config import AppConfig
from glimpse.library.shelf import Library
from glimpse.library.store import KeyValueStore, WriteQueue
from glimpse.overlay.host import Bounds, Point
from glimpse.reading.session import ReadingSession
from glimpse.reading.timer import TimeAccumulator


class FakeTimer:
    def __init__(self, interval: float, callback: Callable[[], object]) -> None:
        self.interval = interval
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeScheduler:
    """Collects timers; tests fire them by hand."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def set_interval(self, interval: float, callback: Callable[[], object]) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.stopped]

    def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            for timer in self.active:
                timer.callback()


class FakeWindow:
    def __init__(self, bounds: Bounds = Bounds(100, 100, 600, 80)) -> None:
        self.bounds = bounds
        self.visible = True
        self.commands: list[str] = []
        self.opacity: Optional[int] = None
        self.always_on_top: Optional[bool] = None
        self.pointer: Optional[Point] = None

    def show(self) -> None:
        self.visible = True
        self.commands.append("show")

    def hide(self) -> None:
        self.visible = False
        self.commands.append("hide")

    def is_visible(self) -> bool:
        return self.visible

    def get_bounds(self) -> Bounds:
        return self.bounds

    def set_opacity(self, percent: int) -> None:
        self.opacity = percent

    def set_always_on_top(self, flag: bool) -> None:
        self.always_on_top = flag

    def get_cursor_screen_position(self) -> Optional[Point]:
        return self.pointer


class CountingQueue(WriteQueue):
    """WriteQueue that records every submission."""

    def __init__(self, store: KeyValueStore) -> None:
        super().__init__(store)
        self.submitted: list[tuple[str, object]] = []

    def submit(self, key: str, value: object) -> int:
        self.submitted.append((key, value))
        return super().submit(key, value)

    def count(self, key: str) -> int:
        return sum(1 for k, _ in self.submitted if k == key)


TODAY = date(2024, 5, 6)


@pytest.fixture
def store(tmp_path: Path) -> KeyValueStore:
    kv = KeyValueStore(tmp_path / "test.db")
    yield kv
    kv.close()


@pytest.fixture
def queue(store: KeyValueStore) -> CountingQueue:
    return CountingQueue(store)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def window() -> FakeWindow:
    return FakeWindow()


@pytest.fixture
def accumulator(queue: CountingQueue, scheduler: FakeScheduler) -> TimeAccumulator:
    acc = TimeAccumulator(queue, scheduler, today=lambda: TODAY)
    acc.load()
    return acc


@pytest.fixture
def library(queue: CountingQueue) -> Library:
    lib = Library(queue)
    lib.load()
    return lib


@pytest.fixture
def session(library: Library, accumulator: TimeAccumulator) -> ReadingSession:
    return ReadingSession(library, accumulator)


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        data_dir=tmp_path / "data",
        config_dir=tmp_path / "config",
    )
