# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tuido.core.models import Task
from tuido.core.session import Session, TasksLoaded
from tuido.tasks.task_store import TaskStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap helpers.

    We intentionally use a SimpleNamespace rather than reading the real
    environment, to keep unit tests isolated and deterministic.
    """
    art = tmp_path / "art.txt"
    art.write_text("  /\\_/\\\n ( o.o )\n", "utf-8")
    return SimpleNamespace(
        app_name="tuido-test",
        log_level="DEBUG",
        console_logging=False,
        data_dir=tmp_path / "data",
        db_path=tmp_path / "tasks.db",
        ascii_art_path=art,
        tick_interval_seconds=60.0,
        loading_delay_seconds=0.0,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "tasks.db")


@pytest.fixture()
def make_session(clock: FakeClock):
    """Build a Session that already left Loading with the given titles."""

    def _make(*titles: str) -> Session:
        session = Session(clock=clock)
        tasks = [Task(title=t, id=i + 1, created_at=clock()) for i, t in enumerate(titles)]
        session.handle(TasksLoaded(tasks))
        return session

    return _make
