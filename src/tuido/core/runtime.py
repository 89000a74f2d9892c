# src/tuido/core/runtime.py

from __future__ import annotations

"""
Session driver.

Feeds events into a Session and executes the commands it emits:
- persistence commands go to the TaskRepo (fire-and-forget, failures logged),
- timer/focus/redraw/quit commands go to the SessionHost.

Storage failures never undo the in-memory change that triggered them.
"""

import logging

from .errors import StorageOperationFailed
from .ports import SessionHost, TaskRepo
from .session import (
    BlurInput,
    Command,
    DeleteTask,
    Event,
    FocusInput,
    InsertTask,
    Quit,
    Redraw,
    ScheduleLoad,
    ScheduleTick,
    Session,
    TasksLoaded,
    TaskStored,
    Tick,
    UpdateTask,
)

logger = logging.getLogger(__name__)


class SessionDriver:
    def __init__(self, session: Session, repo: TaskRepo, host: SessionHost) -> None:
        self.session = session
        self._repo = repo
        self._host = host

    @property
    def state(self):
        return self.session.state

    def start(self) -> None:
        self._run(self.session.start())

    def dispatch(self, event: Event) -> None:
        self._run(self.session.handle(event))

    def _run(self, commands: list[Command]) -> None:
        for cmd in commands:
            self._execute(cmd)

    def _execute(self, cmd: Command) -> None:
        if isinstance(cmd, InsertTask):
            self._insert(cmd)
        elif isinstance(cmd, UpdateTask):
            self._update(cmd)
        elif isinstance(cmd, DeleteTask):
            self._delete(cmd)
        elif isinstance(cmd, ScheduleTick):
            self._host.schedule(cmd.delay, lambda: self.dispatch(Tick()))
        elif isinstance(cmd, ScheduleLoad):
            self._host.schedule(cmd.delay, self.load)
        elif isinstance(cmd, Redraw):
            self._host.redraw()
        elif isinstance(cmd, FocusInput):
            self._host.focus_input()
        elif isinstance(cmd, BlurInput):
            self._host.blur_input()
        elif isinstance(cmd, Quit):
            logger.info("Quit requested.")
            self._host.request_quit()
        else:
            logger.warning("Unknown command: %r", cmd)

    # ---- persistence ----

    def load(self) -> None:
        """Bulk-load tasks and deliver them as a TasksLoaded event."""
        try:
            tasks = list(self._repo.load_all())
        except StorageOperationFailed:
            logger.exception("Loading tasks failed; starting with an empty list.")
            tasks = []
        self.dispatch(TasksLoaded(tasks))

    def _insert(self, cmd: InsertTask) -> None:
        try:
            stored = self._repo.insert(cmd.task)
        except StorageOperationFailed:
            logger.exception("Saving task failed title=%r", cmd.task.title)
            return
        self.dispatch(TaskStored(cmd.task, stored.id))

    def _update(self, cmd: UpdateTask) -> None:
        if not cmd.task.is_persisted:
            logger.debug("Skipping update of unsaved task title=%r", cmd.task.title)
            return
        try:
            self._repo.update(cmd.task)
        except StorageOperationFailed:
            logger.exception("Updating task failed id=%s", cmd.task.id)

    def _delete(self, cmd: DeleteTask) -> None:
        if cmd.task_id <= 0:
            logger.debug("Skipping delete of unsaved task.")
            return
        try:
            self._repo.delete(cmd.task_id)
        except StorageOperationFailed:
            logger.exception("Deleting task failed id=%s", cmd.task_id)
