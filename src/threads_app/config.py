"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
- Simulated delays are plain settings so tests and demos can shrink them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_PREFIX = "THREADS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_delay(name: str, default: float) -> float:
    return max(0.0, _env_float(name, default))


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class DelayProfile:
    """Simulated work duration (seconds) per operation."""

    process: float = 2.0
    sort: float = 1.0
    process_all: float = 2.0
    load: float = 1.5


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Simulated work ----
    process_delay: float
    sort_delay: float
    process_all_delay: float
    load_delay: float

    # ---- Texts ----
    ready_message: str
    default_description: str

    def delays(self) -> DelayProfile:
        return DelayProfile(
            process=self.process_delay,
            sort=self.sort_delay,
            process_all=self.process_all_delay,
            load=self.load_delay,
        )

    @staticmethod
    def from_env() -> "Settings":
        defaults = DelayProfile()

        app_name = _env(_k("APP_NAME"), "threads-app").strip() or "threads-app"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/threads"))

        ready_message = _env(_k("READY_MESSAGE"), "Ready to add tasks").strip() or "Ready to add tasks"
        default_description = (
            _env(_k("DEFAULT_DESCRIPTION"), "No description").strip() or "No description"
        )

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            process_delay=_env_delay(_k("PROCESS_DELAY"), defaults.process),
            sort_delay=_env_delay(_k("SORT_DELAY"), defaults.sort),
            process_all_delay=_env_delay(_k("PROCESS_ALL_DELAY"), defaults.process_all),
            load_delay=_env_delay(_k("LOAD_DELAY"), defaults.load),
            ready_message=ready_message,
            default_description=default_description,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
