"""Periodic callbacks on a single cooperative event loop."""

from __future__ import annotations

from typing import Callable, Protocol


class Timer(Protocol):
    def stop(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback every ``interval`` seconds.

    Textual's ``App.set_interval`` satisfies this protocol.
    """

    def set_interval(self, interval: float, callback: Callable[[], object]) -> Timer: ...
