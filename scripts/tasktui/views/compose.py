"""New-task view: title and span on one row, description below."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Header

from tasktui.form import Field
from tasktui.views.base import TrackerScreen
from tasktui.views.widgets import FormField, KeyHints

COMPOSE_KEYS = [
    ("Exit", "Esc"),
    ("Next", "Tab"),
    ("Save", "Enter"),
]


class ComposeScreen(TrackerScreen):
    """Form for creating a task."""

    DEFAULT_CSS = """
    ComposeScreen #top-row {
        height: 3;
    }

    ComposeScreen #field-title {
        width: 70%;
    }

    ComposeScreen #field-duration {
        width: 30%;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="top-row"):
            yield FormField(Field.TITLE, id="field-title")
            yield FormField(Field.DURATION, id="field-duration")
        yield FormField(Field.DESCRIPTION, id="field-description", classes="multiline")
        yield KeyHints(COMPOSE_KEYS)

    def refresh_view(self) -> None:
        for field in self.query(FormField):
            field.update_from(self._controller.form)
