"""List view: all tasks plus the optional description overlay."""

from textual.app import ComposeResult
from textual.widgets import Header

from tasktui.views.base import TrackerScreen
from tasktui.views.widgets import DetailsOverlay, KeyHints, TaskTable

LIST_KEYS = [
    ("Quit", "q"),
    ("New", "n"),
    ("Move", "↑/↓"),
    ("Status", "Enter"),
    ("Details", "Space"),
]


class TaskListScreen(TrackerScreen):
    """Main screen listing tasks in insertion order."""

    DEFAULT_CSS = """
    TaskListScreen {
        layers: default overlay;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header()
        yield TaskTable(id="tasks")
        yield DetailsOverlay(id="details")
        yield KeyHints(LIST_KEYS)

    def refresh_view(self) -> None:
        controller = self._controller
        self.query_one(TaskTable).update_from(
            list(controller.store), controller.selected
        )
        self.query_one(DetailsOverlay).update_from(
            controller.selected_task, controller.show_details
        )
