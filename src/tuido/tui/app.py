# src/tuido/tui/app.py

"""
Textual frontend.

TuidoApp is the SessionHost: it turns terminal keys and resizes into session
events, arms timers on the Textual message loop and redraws from the render
projector. All session logic lives in tuido.core.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Input, Static

from ..core.models import Mode
from ..core.ports import TaskRepo
from ..core.render import BANNER, project, render_content, render_tabs
from ..core.runtime import SessionDriver
from ..core.session import (
    DEFAULT_LOADING_DELAY,
    DEFAULT_TICK_INTERVAL,
    DraftChanged,
    InsertSubmitted,
    KeyPressed,
    Resized,
    Session,
)

logger = logging.getLogger(__name__)

INPUT_PLACEHOLDER = "Press enter to add a new todo..."


class TuidoApp(App):
    """Single-user terminal task tracker."""

    TITLE = "tuido"
    AUTO_FOCUS = None
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        align: center middle;
        padding: 1 2;
    }

    #tabs {
        height: 3;
        padding-top: 1;
        text-style: bold;
        content-align: center middle;
    }

    #body {
        height: 1fr;
        padding: 1 4;
    }

    #draft {
        display: none;
        margin: 0 4;
    }

    #footer {
        height: 3;
        text-style: dim;
        content-align: center middle;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "session_quit", "Quit", show=False, priority=True),
        Binding("escape", "session_escape", "Normal mode", show=False, priority=True),
    ]

    def __init__(
        self,
        repo: TaskRepo,
        *,
        about_text: str = "",
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        loading_delay: float = DEFAULT_LOADING_DELAY,
        clock: Callable[[], float] = time.time,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._about_text = about_text
        self._clock = clock
        self.session = Session(clock=clock, tick_interval=tick_interval, loading_delay=loading_delay)
        self.runtime = SessionDriver(self.session, repo, self)
        self._mounted_ready = False

    def compose(self) -> ComposeResult:
        yield Static(id="tabs")
        yield Static(id="body")
        yield Input(placeholder=INPUT_PLACEHOLDER, id="draft")
        yield Static(id="footer")

    def on_mount(self) -> None:
        logger.info("TUI mounted.")
        self._mounted_ready = True
        self.runtime.start()
        self.redraw()

    # ---- SessionHost ----

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        # Textual timers cannot run with a zero interval.
        if delay <= 0:
            self.call_later(callback)
        else:
            self.set_timer(delay, callback)

    def redraw(self) -> None:
        if not self._mounted_ready:
            return
        model = project(self.session.state, self._clock(), about_text=self._about_text)
        tabs = self.query_one("#tabs", Static)
        body = self.query_one("#body", Static)
        footer = self.query_one("#footer", Static)

        if model.loading:
            tabs.update("")
            body.update(Text(BANNER, style="bold"))
            footer.update("")
            return

        tabs.update(Text(render_tabs(model)))
        body.update(Text(render_content(model)))
        footer.update(Text(model.footer))

    def focus_input(self) -> None:
        draft = self.query_one("#draft", Input)
        draft.value = ""
        draft.display = True
        draft.focus()

    def blur_input(self) -> None:
        draft = self.query_one("#draft", Input)
        draft.value = ""
        draft.display = False
        self.set_focus(None)

    def request_quit(self) -> None:
        self.exit()

    # ---- Textual events ----

    def on_key(self, event: events.Key) -> None:
        if self.session.state.mode is Mode.INSERT:
            # Typing belongs to the Input; enter arrives as Input.Submitted
            # and escape through the priority binding.
            return
        event.stop()
        self.runtime.dispatch(KeyPressed(event.key))

    def on_input_changed(self, event: Input.Changed) -> None:
        self.runtime.dispatch(DraftChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.runtime.dispatch(InsertSubmitted())

    def on_resize(self, event: events.Resize) -> None:
        self.runtime.dispatch(Resized(event.size.width, event.size.height))

    def action_session_quit(self) -> None:
        self.runtime.dispatch(KeyPressed("ctrl+c"))

    def action_session_escape(self) -> None:
        self.runtime.dispatch(KeyPressed("escape"))
