"""Reading-time bookkeeping."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from glimpse.library.models import StatisticsState
from glimpse.library.store import STATISTICS_KEY, WriteQueue, load_json
from glimpse.scheduling import Scheduler, Timer

log = logging.getLogger(__name__)

TICK_INTERVAL = 1.0  # seconds
FLUSH_EVERY = 30  # ticks, aligned on today_seconds


class TimeAccumulator:
    """Counts reading seconds for one book at a time.

    Counters are flushed whenever ``today_seconds`` is a multiple of
    ``FLUSH_EVERY`` and unconditionally on ``stop``, so an abrupt exit can
    lose up to ``FLUSH_EVERY - 1`` seconds.
    """

    def __init__(
        self,
        queue: WriteQueue,
        scheduler: Scheduler,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._queue = queue
        self._scheduler = scheduler
        self._today = today
        self._timer: Optional[Timer] = None
        self._book_id: Optional[str] = None
        self.stats = StatisticsState()

    @property
    def active_book_id(self) -> Optional[str]:
        return self._book_id

    @property
    def is_running(self) -> bool:
        return self._timer is not None

    def load(self) -> StatisticsState:
        saved = load_json(self._queue.store, STATISTICS_KEY, dict)
        self.stats = StatisticsState.from_dict(saved) if saved else StatisticsState()
        self._roll_day()
        return self.stats

    def book_seconds(self, book_id: str) -> int:
        return self.stats.per_book_seconds.get(book_id, 0)

    def start(self, book_id: str) -> None:
        if self._book_id is not None and self._book_id != book_id:
            self.stop()
        self._cancel()
        self._book_id = book_id
        self._timer = self._scheduler.set_interval(TICK_INTERVAL, self.tick)
        log.info("Reading time started for %s", book_id)

    def pause(self) -> None:
        self._cancel()

    def resume(self) -> None:
        if self._book_id is not None and self._timer is None:
            self._timer = self._scheduler.set_interval(TICK_INTERVAL, self.tick)

    def stop(self) -> None:
        self._cancel()
        if self._book_id is not None:
            log.info("Reading time stopped for %s", self._book_id)
        self._book_id = None
        self.flush()

    def tick(self) -> None:
        if self._timer is None or self._book_id is None:
            return
        self._roll_day()
        stats = self.stats
        stats.today_seconds += 1
        stats.total_seconds += 1
        stats.per_book_seconds[self._book_id] = self.book_seconds(self._book_id) + 1
        stats.last_read_date = self._today().isoformat()
        if stats.today_seconds % FLUSH_EVERY == 0:
            self.flush()

    def flush(self) -> None:
        self._queue.submit(STATISTICS_KEY, self.stats.to_dict())

    def _roll_day(self) -> None:
        today = self._today().isoformat()
        if self.stats.last_read_date != today:
            self.stats.today_seconds = 0
            self.stats.last_read_date = today

    def _cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
