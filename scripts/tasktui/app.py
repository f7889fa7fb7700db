"""
Task tracker TUI application.

Main entry point for the terminal user interface.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure scripts directory is in path
SCRIPT_DIR = Path(__file__).resolve().parent.parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from textual.app import App  # noqa: E402

from tasktui.config import Settings  # noqa: E402
from tasktui.controller import Controller, KeyPress, ViewState  # noqa: E402
from tasktui.logging_setup import setup_logging  # noqa: E402
from tasktui.state_provider import JsonTaskStore, StoreCorruptError  # noqa: E402
from tasktui.views.base import TrackerScreen  # noqa: E402
from tasktui.views.compose import ComposeScreen  # noqa: E402
from tasktui.views.task_list import TaskListScreen  # noqa: E402

logger = logging.getLogger(__name__)

SCREENS_BY_STATE = {
    ViewState.LIST: TaskListScreen,
    ViewState.COMPOSE: ComposeScreen,
}


class TrackerApp(App):
    """Task tracker application."""

    TITLE = "Tasks"
    SUB_TITLE = "Task Tracker"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    def __init__(self, controller: Controller, **kwargs) -> None:
        super().__init__(**kwargs)
        self.controller = controller

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(self._screen_for(self.controller.state))

    def _screen_for(self, state: ViewState) -> TrackerScreen:
        return SCREENS_BY_STATE[state](self.controller)

    def handle_key_press(self, press: KeyPress) -> None:
        """Run one key through the controller and redraw."""
        before = self.controller.state
        self.controller.handle(press)

        if self.controller.exit:
            self.exit()
            return

        if self.controller.state is not before:
            self.switch_screen(self._screen_for(self.controller.state))
        elif isinstance(self.screen, TrackerScreen):
            self.screen.refresh_view()


def run(tasks_file: Path) -> None:
    """Run the TUI; the store is written back however the app ends."""
    store = JsonTaskStore.load(tasks_file)
    app = TrackerApp(Controller(store))
    try:
        app.run()
    finally:
        store.save(tasks_file)


def main(argv: list[str] | None = None) -> int:
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(
        prog="tasktui", description="Terminal task tracker"
    )
    parser.add_argument(
        "--file",
        type=Path,
        default=settings.tasks_file,
        help=f"Tasks file (default: {settings.tasks_file})",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=settings.log_dir,
        help=f"Directory for tasktui.log (default: {settings.log_dir})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )
    args = parser.parse_args(argv)

    setup_logging(log_dir=args.log_dir, level=args.log_level)

    try:
        run(args.file)
    except StoreCorruptError as e:
        logger.error("Refusing to start: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        print("The file was left untouched.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
