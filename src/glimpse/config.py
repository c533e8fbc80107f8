"""Configuration management via .env file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _xdg_data_home() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


@dataclass
class AppConfig:
    # Paths
    data_dir: Path = field(default_factory=lambda: _xdg_data_home() / "glimpse")
    config_dir: Path = field(default_factory=lambda: _xdg_config_home() / "glimpse")
    store_path: Path = field(init=False)
    log_path: Path = field(init=False)

    log_level: str = "INFO"
    start_dir: str = "~"  # file picker root

    def __post_init__(self) -> None:
        self.store_path = self.data_dir / "glimpse.db"
        self.log_path = self.data_dir / "glimpse.log"
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)


def load_config(env_path: Optional[Path] = None) -> AppConfig:
    """Load config from .env file. Searches CWD then config dir."""
    search_paths = [
        env_path,
        Path.cwd() / ".env",
        _xdg_config_home() / "glimpse" / ".env",
        Path.home() / ".env",
    ]
    for p in search_paths:
        if p and p.exists():
            load_dotenv(p)
            break

    return AppConfig(
        log_level=os.getenv("GLIMPSE_LOG_LEVEL", "INFO").upper(),
        start_dir=os.getenv("GLIMPSE_START_DIR", "~"),
    )
