"""User settings: persistence and applying them to the overlay."""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any

from glimpse.library.models import Settings
from glimpse.library.store import SETTINGS_KEY, WriteQueue, load_json
from glimpse.overlay.host import WindowHost
from glimpse.overlay.visibility import VisibilityController

log = logging.getLogger(__name__)

_NAMES = {f.name for f in fields(Settings)}


def _validate(name: str, value: Any) -> Any:
    if name == "opacity":
        return max(0, min(100, int(value)))
    if name in ("display_lines", "auto_scroll_interval"):
        return max(1, int(value))
    return bool(value)


class SettingsManager:
    def __init__(
        self,
        queue: WriteQueue,
        window: WindowHost,
        visibility: VisibilityController,
    ) -> None:
        self._queue = queue
        self._window = window
        self._visibility = visibility
        self.settings = Settings()

    def load(self) -> Settings:
        saved = load_json(self._queue.store, SETTINGS_KEY, dict)
        loaded = Settings.from_dict(saved)
        defaults = Settings()
        values: dict[str, Any] = {}
        for f in fields(Settings):
            raw = getattr(loaded, f.name)
            try:
                values[f.name] = _validate(f.name, raw)
            except (TypeError, ValueError, OverflowError):
                log.warning("Ignoring saved setting %s=%r", f.name, raw)
                values[f.name] = getattr(defaults, f.name)
        self.settings = Settings(**values)
        self.apply()
        return self.settings

    def apply(self) -> None:
        s = self.settings
        self._window.set_opacity(s.opacity)
        self._window.set_always_on_top(s.always_on_top)
        self._visibility.set_auto_hide_enabled(s.auto_hide_on_mouse_leave)

    def update(self, name: str, value: Any) -> None:
        if name not in _NAMES:
            raise KeyError(f"Unknown setting: {name}")
        value = _validate(name, value)
        setattr(self.settings, name, value)
        self.save()
        log.info("Setting %s = %r", name, value)

        if name == "opacity":
            self._window.set_opacity(value)
        elif name == "always_on_top":
            self._window.set_always_on_top(value)
        elif name == "auto_hide_on_mouse_leave":
            self._visibility.set_auto_hide_enabled(value)

    def reset(self) -> None:
        self.settings = Settings()
        self.save()
        self.apply()

    def save(self) -> None:
        self._queue.submit(SETTINGS_KEY, self.settings.to_dict())
