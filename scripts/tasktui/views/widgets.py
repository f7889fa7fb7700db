"""Widgets for the task tracker screens.

The module-level functions build Rich renderables from state and have no
side effects; the widgets call them on every refresh.
"""

from collections.abc import Sequence

from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text
from textual.widgets import Static

from tasktui.form import Field, FieldState, InputForm
from tasktui.providers import Status, Task

STATUS_STYLES = {
    Status.NOT_STARTED: "dim",
    Status.IN_PROGRESS: "yellow",
    Status.COMPLETE: "green",
    Status.OVERDUE: "red",
}

SELECTED_STYLE = Style(color="blue", reverse=True)
FOCUSED_BORDER = "bold cyan"
VALID_BORDER = "bright_green"
INVALID_BORDER = "bright_red"

DUE_FORMAT = "%Y-%m-%d %H:%M %z"


def status_label(status: Status) -> Text:
    return Text(status.label, style=STATUS_STYLES[status])


def format_due(task: Task) -> str:
    """Due date is derived from created + duration on every render."""
    return task.due.strftime(DUE_FORMAT)


def task_table(tasks: Sequence[Task], selected: int | None) -> Table:
    """Status / Title / Due Date table with the selected row reversed."""
    table = Table(expand=True, title="Tasks", show_lines=False)
    table.add_column("Status", no_wrap=True)
    table.add_column("Title", ratio=3)
    table.add_column("Due Date", no_wrap=True)
    if not tasks:
        table.caption = "No tasks yet. Press n to add one."

    for i, task in enumerate(tasks):
        table.add_row(
            status_label(task.status),
            task.title,
            format_due(task),
            style=SELECTED_STYLE if i == selected else None,
        )
    return table


def description_panel(task: Task) -> Panel:
    return Panel(
        Text(task.description),
        title="Description",
        subtitle=task.title,
        expand=True,
    )


def field_panel(form: InputForm, field: Field) -> Panel:
    """Bordered input box whose border reflects focus and validity."""
    state = form.state(field)
    value = form.value(field)
    title = field.label
    border = "none"
    text_style = ""

    if state is FieldState.VALID:
        border = text_style = VALID_BORDER
    elif state is FieldState.INVALID:
        border = text_style = INVALID_BORDER
        title = f"ERROR: {form.error(field)}"

    if form.focused is field:
        if state is FieldState.UNTOUCHED:
            border = FOCUSED_BORDER
        value += "▏"

    return Panel(
        Text(value, style=text_style),
        title=title,
        title_align="left",
        border_style=border,
        expand=True,
    )


def key_hints(pairs: Sequence[tuple[str, str]]) -> Text:
    """' Exit <Esc> Next <Tab> ...' style instruction line."""
    text = Text()
    for label, key in pairs:
        text.append(f" {label} ")
        text.append(f"<{key}>", style="bold blue")
    return text


class TaskTable(Static):
    """Task list with selection highlight."""

    DEFAULT_CSS = """
    TaskTable {
        height: 1fr;
        padding: 0 1;
    }
    """

    def update_from(self, tasks: Sequence[Task], selected: int | None) -> None:
        self.update(task_table(tasks, selected))


class DetailsOverlay(Static):
    """Modal-style box with the selected task's description."""

    DEFAULT_CSS = """
    DetailsOverlay {
        layer: overlay;
        width: 80%;
        height: 80%;
        margin: 2 8;
        background: $surface;
    }
    """

    def update_from(self, task: Task | None, visible: bool) -> None:
        self.display = visible and task is not None
        if self.display:
            self.update(description_panel(task))


class FormField(Static):
    """One input box of the new-task form."""

    DEFAULT_CSS = """
    FormField {
        height: 3;
    }

    FormField.multiline {
        height: 1fr;
    }
    """

    def __init__(self, field: Field, **kwargs) -> None:
        super().__init__(**kwargs)
        self.field = field

    def update_from(self, form: InputForm) -> None:
        self.update(field_panel(form, self.field))


class KeyHints(Static):
    """Bottom line listing the keys of the current view."""

    DEFAULT_CSS = """
    KeyHints {
        dock: bottom;
        height: 1;
        content-align: center middle;
    }
    """

    def __init__(self, pairs: Sequence[tuple[str, str]], **kwargs) -> None:
        super().__init__(key_hints(pairs), **kwargs)
