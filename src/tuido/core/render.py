# src/tuido/core/render.py

from __future__ import annotations

"""
Render projector: SessionState -> plain text.

`project` extracts exactly what a frontend needs from the state (no styling);
`render_text` lays that out as lines. Both are pure given `now`.
"""

from dataclasses import dataclass

from .models import Mode, Task, View
from .session import SessionState

BANNER = "XTUI||"
HEADING = "Accelerate,Anon"
USER_PLACEHOLDER = "User info and account sign-in/creation status display for cloud sync\n(W.I.P)"
ABOUT_BLURB = (
    "Xtui is a terminal based todo list app to get things done.\n"
    "Embrace the beauty of the terminal and get to work.\n"
    "Built for speed, simplicity and the terminal in mind.\n"
    "Controls inspired by vim."
)
ABOUT_ART_ERROR = "Error loading ASCII art."

NORMAL_FOOTER = "Press 'h' and 'l' to switch tabs | space: toggle | enter: new task | d: delete | u: undo | q: quit"
INSERT_FOOTER = "esc: normal mode | enter: save task | #tag: add tag"

TODO_MARKER = "[ ]"
DONE_MARKER = "[✓]"
CURSOR = "▸ "
NO_CURSOR = "  "
COMPLETED_LABEL = "Completed"


def format_relative_time(then: float, now: float) -> str:
    seconds = max(0.0, now - then)
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{int(seconds // 60)} minutes ago"
    if seconds < 86400:
        return f"{int(seconds // 3600)} hours ago"
    return f"{int(seconds // 86400)} days ago"


@dataclass(slots=True, frozen=True)
class Tab:
    label: str
    active: bool


@dataclass(slots=True, frozen=True)
class TaskRow:
    title: str
    tags: tuple[str, ...]
    done: bool
    marker: str
    age: str
    selected: bool


@dataclass(slots=True, frozen=True)
class RenderModel:
    loading: bool
    view: View
    mode: Mode
    tabs: tuple[Tab, ...]
    rows: tuple[TaskRow, ...]
    draft: str | None
    undo_size: int
    about_text: str
    footer: str


def _row(task: Task, selected: bool, now: float) -> TaskRow:
    if task.is_done:
        age = COMPLETED_LABEL
    else:
        age = f"Created {format_relative_time(task.created_at, now)}"
    return TaskRow(
        title=task.title,
        tags=tuple(task.tags),
        done=task.is_done,
        marker=DONE_MARKER if task.is_done else TODO_MARKER,
        age=age,
        selected=selected,
    )


def build_about_text(ascii_art: str | None) -> str:
    art = ascii_art if ascii_art is not None else ABOUT_ART_ERROR
    return f"{art}\n\n{ABOUT_BLURB}"


def project(state: SessionState, now: float, *, about_text: str = "") -> RenderModel:
    insert = state.mode is Mode.INSERT
    return RenderModel(
        loading=state.loading,
        view=state.current_view,
        mode=state.mode,
        tabs=tuple(Tab(v.label, v is state.current_view) for v in View),
        rows=tuple(_row(t, i == state.selected, now) for i, t in enumerate(state.tasks)),
        draft=state.draft if insert else None,
        undo_size=len(state.undo),
        about_text=about_text or build_about_text(None),
        footer=INSERT_FOOTER if insert else NORMAL_FOOTER,
    )


def render_row(row: TaskRow) -> str:
    cursor = CURSOR if row.selected else NO_CURSOR
    line = f"{cursor} {row.marker} {row.title}"
    if row.tags:
        line += f" [{', '.join(row.tags)}]"
    return f"{line} - {row.age}"


def render_tabs(model: RenderModel) -> str:
    return "   ".join(f"[{t.label}]" if t.active else f" {t.label} " for t in model.tabs)


def render_content(model: RenderModel) -> str:
    """The body of the active view (no tabs, no footer)."""
    if model.view is View.USER:
        return USER_PLACEHOLDER
    if model.view is View.ABOUT:
        return model.about_text

    lines = [HEADING, ""]
    lines.extend(render_row(r) for r in model.rows)
    if model.undo_size:
        lines.append("")
        lines.append(f"undo: {model.undo_size}")
    return "\n".join(lines)


def render_text(model: RenderModel) -> str:
    if model.loading:
        return BANNER

    parts = [render_tabs(model), "", render_content(model)]
    if model.draft is not None:
        parts.append("")
        parts.append(f"> {model.draft}")
    parts.append("")
    parts.append(model.footer)
    return "\n".join(parts)
