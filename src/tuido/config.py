# src/tuido/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app, read once at startup.
- Every value has a fixed fallback, so a missing .env is fine.
- Legacy unprefixed names (DATABASE_PATH, ASCII_ART_PATH) are still honoured.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TUIDO"

DEFAULT_DB_PATH = Path("./tui-do.db")
DEFAULT_ASCII_ART_PATH = Path("faqs_ascii.txt")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(*names: str, default: Path) -> Path:
    raw = _first_env(*names)
    if raw is None:
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    console_logging: bool

    # ---- Local data paths ----
    data_dir: Path
    db_path: Path
    ascii_art_path: Path

    # ---- Session timing ----
    tick_interval_seconds: float
    loading_delay_seconds: float

    @staticmethod
    def from_env(*, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        app_name = _env(_k("APP_NAME"), "tuido") or "tuido"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        console_logging = _env_bool(_k("CONSOLE_LOGGING"), False)

        data_dir = _env_path(_k("DATA_DIR"), default=Path(".local/tuido"))
        db_path = _env_path(_k("DATABASE_PATH"), "DATABASE_PATH", default=DEFAULT_DB_PATH)
        ascii_art_path = _env_path(
            _k("ASCII_ART_PATH"), "ASCII_ART_PATH", default=DEFAULT_ASCII_ART_PATH
        )

        tick_interval_seconds = max(1.0, _env_float(_k("TICK_INTERVAL"), 60.0))
        loading_delay_seconds = max(0.0, _env_float(_k("LOADING_DELAY"), 2.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_logging=console_logging,
            data_dir=data_dir,
            db_path=db_path,
            ascii_art_path=ascii_art_path,
            tick_interval_seconds=tick_interval_seconds,
            loading_delay_seconds=loading_delay_seconds,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Settings are read lazily, once per process."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
