# src/tuido/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The session core depends on Protocols instead of concrete implementations.
This keeps the storage engine and the terminal frontend swappable and makes
testing easier.
"""

from collections.abc import Callable, Sequence
from typing import Protocol

from .models import Task


class TaskRepo(Protocol):
    """Persistence collaborator. Implementations raise StorageOperationFailed."""

    def load_all(self) -> Sequence[Task]: ...

    def insert(self, task: Task) -> Task:
        """Persist a task and return a copy carrying the assigned id."""
        ...

    def update(self, task: Task) -> None: ...
    def delete(self, task_id: int) -> None: ...


class SessionHost(Protocol):
    """
    Frontend-side port: timers, focus and redraws.

    `schedule` must deliver the callback through the same serial event channel
    as key presses (e.g. the Textual message loop), never from another thread.
    """

    def schedule(self, delay: float, callback: Callable[[], None]) -> None: ...
    def redraw(self) -> None: ...
    def focus_input(self) -> None: ...
    def blur_input(self) -> None: ...
    def request_quit(self) -> None: ...

