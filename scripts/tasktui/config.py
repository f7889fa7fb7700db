"""Settings loaded from environment variables.

Command-line flags in app.py override these values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKTUI"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    tasks_file: Path
    log_dir: Path
    log_level: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            tasks_file=_env_path(_k("FILE"), Path("tasks.json")),
            log_dir=_env_path(_k("LOG_DIR"), Path(".local/tasktui")),
            log_level=_env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO",
        )
