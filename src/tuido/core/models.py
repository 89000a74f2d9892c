# src/tuido/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum


class TaskStatus(IntEnum):
    """Stored as an integer column: 0 = todo, 1 = done."""

    TODO = 0
    DONE = 1

    @classmethod
    def from_db(cls, raw: int | None) -> TaskStatus:
        if raw is None:
            return cls.TODO
        try:
            return cls(int(raw))
        except (TypeError, ValueError):
            return cls.TODO

    def toggled(self) -> TaskStatus:
        return TaskStatus.TODO if self is TaskStatus.DONE else TaskStatus.DONE


class View(IntEnum):
    """Top-level tabs, in display order."""

    TASKS = 0
    USER = 1
    ABOUT = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Mode(StrEnum):
    NORMAL = "normal"
    INSERT = "insert"


@dataclass(slots=True)
class Task:
    """
    A single todo entry.

    `id` is 0 until the store has assigned one.
    `completed_at` is set only while status is DONE.
    """

    title: str
    tags: list[str] = field(default_factory=list)
    status: TaskStatus = TaskStatus.TODO
    created_at: float = 0.0
    completed_at: float | None = None
    id: int = 0

    @property
    def is_done(self) -> bool:
        return self.status is TaskStatus.DONE

    @property
    def is_persisted(self) -> bool:
        return self.id > 0
