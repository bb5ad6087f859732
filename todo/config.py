"""Settings loaded from environment variables (prefix TODO_).

CLI options override these values; nothing here touches the disk.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TODO"

DEFAULT_DATA_FILE = Path("data/tasks.json")
DEFAULT_LOG_DIR = Path(".local/todo")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    data_file: Path = DEFAULT_DATA_FILE
    log_dir: Path = DEFAULT_LOG_DIR
    log_level: int = logging.WARNING


def load_settings() -> Settings:
    return Settings(
        data_file=_env_path(_k("FILE"), DEFAULT_DATA_FILE),
        log_dir=_env_path(_k("LOG_DIR"), DEFAULT_LOG_DIR),
        log_level=_env_level(_k("LOG_LEVEL"), logging.WARNING),
    )
