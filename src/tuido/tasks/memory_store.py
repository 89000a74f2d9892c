# src/tuido/tasks/memory_store.py

from __future__ import annotations

import logging
from dataclasses import replace

from ..core.errors import StorageOperationFailed
from ..core.models import Task

logger = logging.getLogger(__name__)


class InMemoryTaskStore:
    """
    TaskRepo kept in a dict, for tests and throwaway sessions.

    Stores copies so callers cannot mutate stored rows behind its back.
    Ids behave like SQLite AUTOINCREMENT: never reused unless given explicitly.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self._rows: dict[int, Task] = {}
        self._last_id = 0
        for task in tasks or []:
            self.insert(task)

    def load_all(self) -> list[Task]:
        return [self._copy(t) for _, t in sorted(self._rows.items())]

    def insert(self, task: Task) -> Task:
        if not task.title or not task.title.strip():
            raise StorageOperationFailed("insert", "title is required")

        if task.id > 0:
            if task.id in self._rows:
                raise StorageOperationFailed("insert", f"duplicate id {task.id}")
            task_id = task.id
        else:
            task_id = self._last_id + 1
        self._last_id = max(self._last_id, task_id)

        stored = replace(task, id=task_id, tags=list(task.tags))
        self._rows[task_id] = stored
        logger.debug("Task added id=%s", task_id)
        return self._copy(stored)

    def update(self, task: Task) -> None:
        if task.id not in self._rows:
            return
        self._rows[task.id] = self._copy(task)

    def delete(self, task_id: int) -> None:
        self._rows.pop(task_id, None)

    @staticmethod
    def _copy(task: Task) -> Task:
        return replace(task, tags=list(task.tags))

    def __len__(self) -> int:
        return len(self._rows)
