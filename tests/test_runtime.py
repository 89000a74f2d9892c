# tests/test_runtime.py

from __future__ import annotations

import sqlite3
from pathlib import Path

from tuido.core.models import Mode, Task, TaskStatus
from tuido.core.runtime import SessionDriver
from tuido.core.session import DraftChanged, InsertSubmitted, KeyPressed, Session
from tuido.tasks.task_store import TaskStore

from .fakes import FakeHost, RecordingTaskRepo


def _driver(repo, clock, host: FakeHost | None = None) -> tuple[SessionDriver, FakeHost]:
    host = host or FakeHost()
    driver = SessionDriver(Session(clock=clock, loading_delay=2, tick_interval=60), repo, host)
    return driver, host


def _started(repo, clock) -> tuple[SessionDriver, FakeHost]:
    driver, host = _driver(repo, clock)
    driver.start()
    host.fire_next()  # deferred load
    return driver, host


def _add(driver: SessionDriver, text: str) -> None:
    driver.dispatch(KeyPressed("enter"))
    driver.dispatch(DraftChanged(text))
    driver.dispatch(InsertSubmitted())


def test_start_defers_load_until_timer_fires(clock) -> None:
    repo = RecordingTaskRepo([Task(title="stored", created_at=clock())])
    driver, host = _driver(repo, clock)

    driver.start()

    assert [c.delay for c in host.scheduled] == [2.0, 60.0]
    assert driver.state.loading
    assert repo.calls == []

    host.fire_next()

    assert not driver.state.loading
    assert [t.title for t in driver.state.tasks] == ["stored"]
    assert repo.calls == ["load_all"]
    assert host.redraws == 1


def test_tick_rearms_itself(clock) -> None:
    driver, host = _started(RecordingTaskRepo(), clock)
    assert [c.delay for c in host.scheduled] == [60.0]
    redraws = host.redraws

    host.fire_next()

    assert [c.delay for c in host.scheduled] == [60.0]
    assert host.redraws == redraws + 1


def test_commit_insert_persists_and_learns_id(clock) -> None:
    repo = RecordingTaskRepo()
    driver, host = _started(repo, clock)

    driver.dispatch(KeyPressed("enter"))
    assert host.input_focused
    driver.dispatch(DraftChanged("Write report #work"))
    driver.dispatch(InsertSubmitted())

    assert not host.input_focused
    task = driver.state.tasks[0]
    assert task.id == 1
    stored = repo.load_all()
    assert [(t.id, t.title, t.tags) for t in stored] == [(1, "Write report", ["work"])]


def test_delete_then_undo_restores_original_id(clock) -> None:
    repo = RecordingTaskRepo([Task(title="a", created_at=clock()), Task(title="b", created_at=clock())])
    driver, _ = _started(repo, clock)

    driver.dispatch(KeyPressed("d"))
    assert [t.id for t in repo.load_all()] == [2]

    driver.dispatch(KeyPressed("u"))

    assert [t.title for t in driver.state.tasks] == ["b", "a"]
    assert [(t.id, t.title) for t in repo.load_all()] == [(1, "a"), (2, "b")]
    assert driver.state.tasks[-1].id == 1


def test_toggle_persists_status(clock) -> None:
    repo = RecordingTaskRepo([Task(title="a", created_at=clock())])
    driver, _ = _started(repo, clock)

    driver.dispatch(KeyPressed("space"))
    (stored,) = repo.load_all()
    assert stored.status is TaskStatus.DONE
    assert stored.completed_at == clock()

    driver.dispatch(KeyPressed("space"))
    (stored,) = repo.load_all()
    assert stored.status is TaskStatus.TODO
    assert stored.completed_at is None


def test_quit_reaches_host(clock) -> None:
    driver, host = _started(RecordingTaskRepo(), clock)
    driver.dispatch(KeyPressed("q"))
    assert host.quit_requested


def test_load_failure_starts_empty(clock) -> None:
    repo = RecordingTaskRepo([Task(title="a", created_at=clock())])
    repo.failing.add("load_all")

    driver, _ = _started(repo, clock)

    assert not driver.state.loading
    assert driver.state.tasks == []


def test_insert_failure_keeps_in_memory_task(clock) -> None:
    repo = RecordingTaskRepo()
    repo.failing.add("insert")
    driver, _ = _started(repo, clock)

    _add(driver, "offline")

    assert [t.title for t in driver.state.tasks] == ["offline"]
    assert driver.state.tasks[0].id == 0
    assert driver.state.mode is Mode.NORMAL
    assert len(repo) == 0

    # An unsaved task never reaches the store on toggle or delete.
    driver.dispatch(KeyPressed("space"))
    driver.dispatch(KeyPressed("d"))
    assert repo.calls == ["load_all", "insert"]
    assert driver.state.tasks == []


def test_update_and_delete_failures_are_not_rolled_back(clock) -> None:
    repo = RecordingTaskRepo([Task(title="a", created_at=clock()), Task(title="b", created_at=clock())])
    repo.failing.update({"update", "delete"})
    driver, _ = _started(repo, clock)

    driver.dispatch(KeyPressed("space"))
    assert driver.state.tasks[0].status is TaskStatus.DONE

    driver.dispatch(KeyPressed("d"))
    assert [t.title for t in driver.state.tasks] == ["b"]
    assert len(repo) == 2


def test_session_survives_restart_with_sqlite(tmp_path: Path, clock) -> None:
    db = tmp_path / "tasks.db"
    driver, _ = _started(TaskStore(db), clock)
    _add(driver, "first #a")
    _add(driver, "second")
    driver.dispatch(KeyPressed("j"))
    driver.dispatch(KeyPressed("space"))
    driver.dispatch(KeyPressed("k"))
    driver.dispatch(KeyPressed("d"))

    restarted, _ = _started(TaskStore(db), clock)

    assert [(t.title, t.status) for t in restarted.state.tasks] == [("second", TaskStatus.DONE)]
    assert len(restarted.state.undo) == 0


def _raw_rows(db: Path, *statements: str) -> None:
    conn = sqlite3.connect(db)
    for sql in statements:
        conn.execute(sql)
    conn.commit()
    conn.close()


def test_undo_of_untitled_row_is_logged_not_raised(tmp_path: Path, clock, caplog) -> None:
    db = tmp_path / "tasks.db"
    store = TaskStore(db)
    _raw_rows(db, "INSERT INTO tasks(title, tags, status, created_at) VALUES ('', 'onlytag', 0, 1)")
    driver, _ = _started(store, clock)

    driver.dispatch(KeyPressed("d"))
    driver.dispatch(KeyPressed("u"))

    assert [(t.title, t.tags) for t in driver.state.tasks] == [("", ["onlytag"])]
    assert store.load_all() == []
    assert "Saving task failed" in caplog.text


def test_session_loads_datetime_text_database(tmp_path: Path, clock) -> None:
    db = tmp_path / "tui-do.db"
    _raw_rows(
        db,
        """
        CREATE TABLE tasks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            tags TEXT,
            status INTEGER DEFAULT 0,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            completed_at DATETIME
        )
        """,
        "INSERT INTO tasks(title, tags, created_at) "
        "VALUES ('Write report', 'work', '2024-05-01 10:00:00.123456+00:00')",
    )

    driver, _ = _started(TaskStore(db), clock)

    assert not driver.state.loading
    (task,) = driver.state.tasks
    assert (task.id, task.title, task.tags) == (1, "Write report", ["work"])
    assert task.created_at > 0
