"""Interfaces the overlay core needs from whatever hosts the window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Bounds:
    x: int
    y: int
    width: int
    height: int

    def contains(self, point: Point) -> bool:
        """Edges are inclusive on all four sides."""
        return (
            self.x <= point.x <= self.x + self.width
            and self.y <= point.y <= self.y + self.height
        )


class WindowHost(Protocol):
    def show(self) -> None: ...

    def hide(self) -> None: ...

    def is_visible(self) -> bool: ...

    def get_bounds(self) -> Bounds: ...

    def set_opacity(self, percent: int) -> None: ...

    def set_always_on_top(self, flag: bool) -> None: ...


class PointerSource(Protocol):
    def get_cursor_screen_position(self) -> Optional[Point]:
        """Current pointer position, or None when it is outside the host."""
        ...
