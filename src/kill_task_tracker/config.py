# src/kill_task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a usable default; nothing is required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "KTT"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data paths ----
    data_dir: Path
    definitions_path: Path
    progress_dir: Path

    # ---- Session ----
    character_name: str

    # ---- Tracking behaviour ----
    # Write progress on kill broadcasts for monsters no task tracks.
    persist_unmatched_kills: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "KillTaskTracker") or "KillTaskTracker"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/ktt"))
        definitions_path = _env_path(_k("DEFINITIONS_PATH"), data_dir / "task_definitions.json")
        progress_dir = _env_path(_k("PROGRESS_DIR"), data_dir)

        character_name = _env(_k("CHARACTER_NAME"), "").strip()

        persist_unmatched_kills = _env_bool(_k("PERSIST_UNMATCHED_KILLS"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            definitions_path=definitions_path,
            progress_dir=progress_dir,
            character_name=character_name,
            persist_unmatched_kills=persist_unmatched_kills,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env (if present) and build settings once per process."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
