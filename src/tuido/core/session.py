# src/tuido/core/session.py

from __future__ import annotations

"""
Interactive session core.

A Session owns the SessionState and turns events (keys, timer ticks, load
completion, resizes) into state transitions plus a list of commands for the
outside world: persistence calls, timer re-arms, focus changes, redraws.

The session never talks to the store or the terminal directly; SessionDriver
executes the returned commands. Every event is handled to completion before
the next one, so no locking is needed here.
"""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace

from .keymap import Action, is_allowed, resolve_key
from .models import Mode, Task, TaskStatus, View
from .tags import parse_tags
from .undo import UndoBuffer

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 60.0
DEFAULT_LOADING_DELAY = 2.0


# ---- events ----


@dataclass(slots=True, frozen=True)
class KeyPressed:
    key: str


@dataclass(slots=True, frozen=True)
class DraftChanged:
    """The input widget's text changed (Insert mode only)."""

    text: str


@dataclass(slots=True, frozen=True)
class InsertSubmitted:
    """Enter was pressed inside the input widget."""


@dataclass(slots=True, frozen=True)
class Tick:
    pass


@dataclass(slots=True, frozen=True)
class TasksLoaded:
    tasks: Sequence[Task]


@dataclass(slots=True, frozen=True)
class Resized:
    width: int
    height: int


@dataclass(slots=True, frozen=True)
class TaskStored:
    """Feedback after a successful insert: `task` now lives under `task_id`."""

    task: Task
    task_id: int


Event = KeyPressed | DraftChanged | InsertSubmitted | Tick | TasksLoaded | Resized | TaskStored


# ---- commands ----


@dataclass(slots=True, frozen=True)
class InsertTask:
    task: Task


@dataclass(slots=True, frozen=True)
class UpdateTask:
    task: Task


@dataclass(slots=True, frozen=True)
class DeleteTask:
    task_id: int


@dataclass(slots=True, frozen=True)
class ScheduleTick:
    delay: float


@dataclass(slots=True, frozen=True)
class ScheduleLoad:
    delay: float


@dataclass(slots=True, frozen=True)
class Redraw:
    pass


@dataclass(slots=True, frozen=True)
class FocusInput:
    pass


@dataclass(slots=True, frozen=True)
class BlurInput:
    pass


@dataclass(slots=True, frozen=True)
class Quit:
    pass


Command = (
    InsertTask
    | UpdateTask
    | DeleteTask
    | ScheduleTick
    | ScheduleLoad
    | Redraw
    | FocusInput
    | BlurInput
    | Quit
)


@dataclass(slots=True)
class SessionState:
    loading: bool = True
    current_view: View = View.TASKS
    mode: Mode = Mode.NORMAL
    tasks: list[Task] = field(default_factory=list)
    selected: int = 0
    undo: UndoBuffer = field(default_factory=UndoBuffer)
    draft: str = ""
    width: int = 0
    height: int = 0

    @property
    def selected_task(self) -> Task | None:
        if not self.tasks:
            return None
        return self.tasks[self.selected]

    def clamp_selection(self) -> None:
        if not self.tasks:
            self.selected = 0
        else:
            self.selected = max(0, min(self.selected, len(self.tasks) - 1))


class Session:
    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.time,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        loading_delay: float = DEFAULT_LOADING_DELAY,
        state: SessionState | None = None,
    ) -> None:
        self.state = state if state is not None else SessionState()
        self._clock = clock
        self._tick_interval = max(1.0, float(tick_interval))
        self._loading_delay = max(0.0, float(loading_delay))

        self._actions: dict[Action, Callable[[], list[Command]]] = {
            Action.QUIT: self._quit,
            Action.NEXT_TAB: self._next_tab,
            Action.PREV_TAB: self._prev_tab,
            Action.DELETE_SELECTED: self._delete_selected,
            Action.UNDO: self._undo,
            Action.MOVE_UP: self._move_up,
            Action.MOVE_DOWN: self._move_down,
            Action.ENTER_INSERT: self._enter_insert,
            Action.TOGGLE_STATUS: self._toggle_status,
            Action.CANCEL_INSERT: self._cancel_insert,
            Action.COMMIT_INSERT: self._commit_insert,
        }

    def start(self) -> list[Command]:
        """Commands to issue once at startup: the deferred load and the first tick."""
        return [ScheduleLoad(self._loading_delay), ScheduleTick(self._tick_interval)]

    def handle(self, event: Event) -> list[Command]:
        if isinstance(event, KeyPressed):
            return self._on_key(event.key)
        if isinstance(event, InsertSubmitted):
            if self.state.mode is not Mode.INSERT:
                return []
            return self.apply(Action.COMMIT_INSERT)
        if isinstance(event, DraftChanged):
            if self.state.mode is Mode.INSERT:
                self.state.draft = event.text
            return []
        if isinstance(event, Tick):
            return [ScheduleTick(self._tick_interval), Redraw()]
        if isinstance(event, TasksLoaded):
            return self._on_loaded(event.tasks)
        if isinstance(event, Resized):
            self.state.width = event.width
            self.state.height = event.height
            return [Redraw()]
        if isinstance(event, TaskStored):
            return self._on_stored(event.task, event.task_id)

        logger.warning("Unhandled session event: %r", event)
        return []

    def apply(self, action: Action) -> list[Command]:
        """Run a single action against the current state; disallowed actions are no-ops."""
        st = self.state
        if st.loading and action is not Action.QUIT:
            return []
        if not is_allowed(action, st.current_view, st.mode):
            logger.debug("Ignoring %s in %s view, %s mode.", action, st.current_view.name, st.mode)
            return []
        return self._actions[action]()

    # ---- event handlers ----

    def _on_key(self, key: str) -> list[Command]:
        action = resolve_key(key, self.state.current_view, self.state.mode)
        if action is None:
            return []
        return self.apply(action)

    def _on_loaded(self, tasks: Sequence[Task]) -> list[Command]:
        st = self.state
        if not st.loading:
            logger.warning("Ignoring duplicate load (%d tasks).", len(tasks))
            return []
        st.tasks = list(tasks)
        st.clamp_selection()
        st.loading = False
        st.current_view = View.TASKS
        st.mode = Mode.NORMAL
        logger.info("Session ready with %d tasks.", len(st.tasks))
        return [Redraw()]

    def _on_stored(self, task: Task, task_id: int) -> list[Command]:
        for item in self.state.tasks:
            if item is task:
                item.id = task_id
                return []
        logger.debug("Stored task id=%s is no longer in the list.", task_id)
        return []

    # ---- actions ----

    def _quit(self) -> list[Command]:
        return [Quit()]

    def _next_tab(self) -> list[Command]:
        st = self.state
        if st.current_view >= View.ABOUT:
            return []
        st.current_view = View(st.current_view + 1)
        return [Redraw()]

    def _prev_tab(self) -> list[Command]:
        st = self.state
        if st.current_view <= View.TASKS:
            return []
        st.current_view = View(st.current_view - 1)
        return [Redraw()]

    def _delete_selected(self) -> list[Command]:
        st = self.state
        if st.current_view is not View.TASKS or not st.tasks:
            return []

        idx = st.selected
        removed = st.tasks[idx]
        st.tasks = st.tasks[:idx] + st.tasks[idx + 1:]
        st.undo.push(removed)
        st.clamp_selection()

        logger.debug("Deleted task id=%s title=%r", removed.id, removed.title)
        return [DeleteTask(removed.id), Redraw()]

    def _undo(self) -> list[Command]:
        st = self.state
        removed = st.undo.pop()
        if removed is None:
            return []

        restored = replace(removed, tags=list(removed.tags))
        st.tasks = [*st.tasks, restored]
        st.selected = len(st.tasks) - 1

        logger.debug("Restored task id=%s title=%r", restored.id, restored.title)
        return [InsertTask(restored), Redraw()]

    def _move_up(self) -> list[Command]:
        st = self.state
        if st.selected <= 0:
            return []
        st.selected -= 1
        return [Redraw()]

    def _move_down(self) -> list[Command]:
        st = self.state
        if st.selected >= len(st.tasks) - 1:
            return []
        st.selected += 1
        return [Redraw()]

    def _enter_insert(self) -> list[Command]:
        st = self.state
        st.mode = Mode.INSERT
        st.draft = ""
        return [FocusInput(), Redraw()]

    def _toggle_status(self) -> list[Command]:
        task = self.state.selected_task
        if task is None:
            return []

        task.status = task.status.toggled()
        task.completed_at = self._clock() if task.status is TaskStatus.DONE else None
        return [UpdateTask(task), Redraw()]

    def _cancel_insert(self) -> list[Command]:
        st = self.state
        st.draft = ""
        st.mode = Mode.NORMAL
        return [BlurInput(), Redraw()]

    def _commit_insert(self) -> list[Command]:
        st = self.state
        title, tags = parse_tags(st.draft)
        if not title:
            # Empty, whitespace-only or tag-only drafts keep Insert mode.
            return []

        task = Task(title=title, tags=tags, status=TaskStatus.TODO, created_at=self._clock())
        was_empty = not st.tasks
        st.tasks = [*st.tasks, task]
        if was_empty:
            st.selected = 0

        st.draft = ""
        st.mode = Mode.NORMAL
        return [InsertTask(task), BlurInput(), Redraw()]
