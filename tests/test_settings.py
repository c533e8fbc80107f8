"""Tests for the settings manager."""

from __future__ import annotations

import pytest

from glimpse.library.models import Settings
from glimpse.library.store import SETTINGS_KEY
from glimpse.overlay.visibility import VisibilityController
from glimpse.settings import SettingsManager


@pytest.fixture
def visibility(window, scheduler) -> VisibilityController:
    return VisibilityController(window, window, scheduler)


@pytest.fixture
def manager(queue, window, visibility) -> SettingsManager:
    return SettingsManager(queue, window, visibility)


class TestLoad:
    def test_defaults_applied(self, manager, window, visibility, scheduler):
        settings = manager.load()
        assert settings == Settings()
        assert window.opacity == 90
        assert window.always_on_top is True
        assert visibility.state.auto_hide_enabled is True
        assert len(scheduler.active) == 1

    def test_saved_values_merged(self, manager, store, window, visibility):
        store.set(SETTINGS_KEY, {"opacity": 40, "autoHideOnMouseLeave": False})
        settings = manager.load()
        assert settings.opacity == 40
        assert settings.display_lines == 2
        assert window.opacity == 40
        assert visibility.state.auto_hide_enabled is False

    def test_saved_values_validated(self, manager, store):
        store.set(SETTINGS_KEY, {"opacity": 250, "displayLines": 0})
        settings = manager.load()
        assert settings.opacity == 100
        assert settings.display_lines == 1

    def test_bad_saved_values_fall_back_to_defaults(self, manager, store, window):
        store.set(
            SETTINGS_KEY,
            {"opacity": None, "displayLines": "many", "autoScrollInterval": 8},
        )
        settings = manager.load()
        assert settings.opacity == 90
        assert settings.display_lines == 2
        assert settings.auto_scroll_interval == 8
        assert window.opacity == 90


class TestUpdate:
    def test_opacity(self, manager, window, store):
        manager.load()
        manager.update("opacity", -20)
        assert manager.settings.opacity == 0
        assert window.opacity == 0
        assert store.get(SETTINGS_KEY)["opacity"] == 0

    def test_always_on_top(self, manager, window):
        manager.update("always_on_top", False)
        assert window.always_on_top is False

    def test_auto_hide_toggle(self, manager, visibility, scheduler):
        manager.update("auto_hide_on_mouse_leave", True)
        assert visibility.polling
        manager.update("auto_hide_on_mouse_leave", False)
        assert not visibility.polling
        assert scheduler.active == []

    def test_display_lines_floor(self, manager):
        manager.update("display_lines", 0)
        assert manager.settings.display_lines == 1

    def test_unknown_setting(self, manager):
        with pytest.raises(KeyError, match="Unknown setting"):
            manager.update("font_size", 14)

    def test_reset(self, manager, store, window):
        manager.update("opacity", 30)
        manager.reset()
        assert manager.settings == Settings()
        assert window.opacity == 90
        assert store.get(SETTINGS_KEY) == Settings().to_dict()
