"""
View controller: the two-screen state machine behind the TUI.

Holds no terminal state, so it can be driven directly from tests. The
Textual layer converts key events to KeyPress and calls `handle`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from tasktui.form import Field, FieldState, InputForm, InvalidDurationError
from tasktui.providers import Status, Task, TaskStore

logger = logging.getLogger(__name__)


class ViewState(Enum):
    LIST = "list"
    COMPOSE = "compose"


class Key(Enum):
    CHAR = "char"
    ENTER = "enter"
    ESCAPE = "escape"
    TAB = "tab"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class KeyPress:
    """One key event. `char` is set only for Key.CHAR."""

    key: Key
    char: str = ""


# List view keys
QUIT = "q"
NEW = "n"
DETAILS = " "


def local_now() -> datetime:
    return datetime.now().astimezone()


class Controller:
    """Dispatches key presses to the active view and mutates the store."""

    def __init__(
        self,
        store: TaskStore,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.store = store
        self.form = InputForm()
        self.state = ViewState.LIST
        self.selected: int | None = None
        self.show_details = False
        self.exit = False
        self._clock = clock

    @property
    def selected_task(self) -> Task | None:
        if self.selected is None or not 0 <= self.selected < len(self.store):
            return None
        return self.store[self.selected]

    def handle(self, press: KeyPress) -> None:
        """Apply one key press to the current view."""
        if self.state is ViewState.LIST:
            self._handle_list(press)
        else:
            self._handle_compose(press)

    # -------------------- list view --------------------

    def _handle_list(self, press: KeyPress) -> None:
        if press.key is Key.CHAR:
            if press.char == QUIT:
                self.exit = True
            elif press.char == NEW:
                self.start_compose()
            elif press.char == DETAILS:
                self.toggle_details()
        elif press.key is Key.DOWN:
            self.next()
        elif press.key is Key.UP:
            self.previous()
        elif press.key is Key.ENTER:
            self.toggle_status()

    def next(self) -> None:
        """Move the selection down, wrapping to the top."""
        if not len(self.store):
            return
        if self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected + 1) % len(self.store)

    def previous(self) -> None:
        """Move the selection up, wrapping to the bottom."""
        if not len(self.store):
            return
        if self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected - 1) % len(self.store)

    def toggle_status(self) -> Status | None:
        """Advance the selected task's status; None if nothing is selected."""
        task = self.selected_task
        if task is None:
            return None
        status = self.store.advance(self.selected)
        logger.info("Task %r -> %s", task.title, status.value)
        return status

    def toggle_details(self) -> None:
        self.show_details = not self.show_details

    # -------------------- compose view --------------------

    def start_compose(self) -> None:
        self.form.reset()
        self.state = ViewState.COMPOSE

    def cancel_compose(self) -> None:
        self.form.reset()
        self.state = ViewState.LIST

    def _handle_compose(self, press: KeyPress) -> None:
        if press.key is Key.ESCAPE:
            self.cancel_compose()
        elif press.key is Key.TAB:
            self.form.focus_next()
        elif press.key is Key.CHAR:
            self.form.insert(press.char)
        elif press.key is Key.BACKSPACE:
            self.form.backspace()
        elif press.key is Key.ENTER:
            self.submit()

    def submit(self) -> Task | None:
        """Validate the form and commit a new task.

        Returns the new task, or None when validation failed and the view
        stays in compose with the offending field marked invalid.
        """
        form = self.form
        created = self._clock()
        ok = True

        try:
            duration = form.parse_span(created)
        except InvalidDurationError as e:
            logger.debug("Rejected span %r: %s", form.value(Field.DURATION), e)
            form.mark(Field.DURATION, FieldState.INVALID, str(e))
            ok = False
        else:
            form.mark(Field.DURATION, FieldState.VALID)

        title = form.value(Field.TITLE)
        if title.strip():
            form.mark(Field.TITLE, FieldState.VALID)
        else:
            form.mark(Field.TITLE, FieldState.INVALID, "title is required")
            ok = False

        if not ok:
            return None

        task = Task(
            created=created,
            duration=duration,
            title=title,
            description=form.value(Field.DESCRIPTION),
        )
        self.store.append(task)
        self.state = ViewState.LIST
        logger.info("Created task %r due %s", task.title, task.due.isoformat())
        return task
