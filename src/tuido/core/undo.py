# src/tuido/core/undo.py

from __future__ import annotations

from collections import deque

from .models import Task

UNDO_LIMIT = 10


class UndoBuffer:
    """Bounded LIFO of deleted tasks; the oldest entry is evicted when full."""

    def __init__(self, capacity: int = UNDO_LIMIT) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._items: deque[Task] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen or 0

    def push(self, task: Task) -> None:
        self._items.append(task)

    def pop(self) -> Task | None:
        if not self._items:
            return None
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def snapshot(self) -> list[Task]:
        """Oldest first."""
        return list(self._items)
