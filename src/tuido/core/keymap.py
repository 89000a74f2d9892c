# src/tuido/core/keymap.py

from __future__ import annotations

from enum import StrEnum

from .models import Mode, View


class Action(StrEnum):
    QUIT = "quit"
    NEXT_TAB = "next-tab"
    PREV_TAB = "prev-tab"
    DELETE_SELECTED = "delete-selected"
    UNDO = "undo"
    MOVE_UP = "move-up"
    MOVE_DOWN = "move-down"
    ENTER_INSERT = "enter-insert"
    TOGGLE_STATUS = "toggle-status"
    CANCEL_INSERT = "cancel-insert"
    COMMIT_INSERT = "commit-insert"


# Key names follow Textual's event.key naming.
GLOBAL_KEYS: dict[str, Action] = {
    "q": Action.QUIT,
    "ctrl+c": Action.QUIT,
    "l": Action.NEXT_TAB,
    "right": Action.NEXT_TAB,
    "h": Action.PREV_TAB,
    "left": Action.PREV_TAB,
    "d": Action.DELETE_SELECTED,
    "u": Action.UNDO,
}

TASKS_KEYS: dict[str, Action] = {
    "enter": Action.ENTER_INSERT,
    "k": Action.MOVE_UP,
    "up": Action.MOVE_UP,
    "j": Action.MOVE_DOWN,
    "down": Action.MOVE_DOWN,
    "space": Action.TOGGLE_STATUS,
}

INSERT_KEYS: dict[str, Action] = {
    "escape": Action.CANCEL_INSERT,
    "enter": Action.COMMIT_INSERT,
}


def resolve_key(key: str, view: View, mode: Mode) -> Action | None:
    """Map a key name to an action for the given view and mode, or None."""
    if mode is Mode.INSERT:
        return INSERT_KEYS.get(key)

    action = GLOBAL_KEYS.get(key)
    if action is not None:
        return action
    if view is View.TASKS:
        return TASKS_KEYS.get(key)
    return None


INSERT_ACTIONS = frozenset(INSERT_KEYS.values())
TASKS_ONLY_ACTIONS = frozenset(TASKS_KEYS.values()) | {Action.DELETE_SELECTED}


def is_allowed(action: Action, view: View, mode: Mode) -> bool:
    """Whether an action may run in the given view and mode, however it was triggered."""
    if mode is Mode.INSERT:
        return action in INSERT_ACTIONS
    if action in INSERT_ACTIONS:
        return False
    if action in TASKS_ONLY_ACTIONS:
        return view is View.TASKS
    return True
