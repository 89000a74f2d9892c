# src/tuido/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures local (gitignored) directories exist,
- opens the task store from settings,
- loads the About screen's ASCII art,
- builds the Textual app with everything injected.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import Settings, get_settings
from ..core.ports import TaskRepo
from ..core.render import build_about_text
from ..tasks.task_store import TaskStore
from ..tui.app import TuidoApp

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def open_task_store(settings: Settings) -> TaskStore:
    """Open the SQLite store. Raises StorageUnavailable."""
    return TaskStore(settings.db_path)


def load_about_text(path: str | Path) -> str:
    path = Path(path)
    try:
        art = path.read_text("utf-8")
    except OSError:
        logger.warning("ASCII art not readable: %s", path)
        return build_about_text(None)
    return build_about_text(art.rstrip("\n"))


def create_app(*, settings: Settings | None = None, repo: TaskRepo | None = None) -> TuidoApp:
    """
    Build the app from the provided settings.

    If settings is None, falls back to get_settings(). If repo is None, the
    SQLite store at settings.db_path is opened (StorageUnavailable propagates).
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if repo is None:
        repo = open_task_store(settings)

    return TuidoApp(
        repo,
        about_text=load_about_text(settings.ascii_art_path),
        tick_interval=settings.tick_interval_seconds,
        loading_delay=settings.loading_delay_seconds,
    )
