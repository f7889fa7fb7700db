"""End-to-end tests for the Textual app and CLI entry point."""

import asyncio
import json
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import make_task
from tasktui import app as app_module
from tasktui.app import TrackerApp, main, run
from tasktui.controller import Controller, ViewState
from tasktui.form import Field, FieldState
from tasktui.providers import Status
from tasktui.state_provider import JsonTaskStore
from tasktui.views.compose import ComposeScreen
from tasktui.views.task_list import TaskListScreen


def drive(controller: Controller, *keys: str) -> None:
    """Run the app headless and press keys."""

    async def scenario() -> None:
        app = TrackerApp(controller)
        async with app.run_test() as pilot:
            await pilot.press(*keys)

    asyncio.run(scenario())


class TestTrackerApp:
    """Keyboard scenarios through the real Textual event loop."""

    def test_add_task_and_quit(self) -> None:
        controller = Controller(JsonTaskStore())

        drive(
            controller,
            "n", "t", "e", "a",
            "tab", "5",
            "tab", "g", "r", "e", "e", "n",
            "enter",
            "q",
        )

        assert controller.exit is True
        assert len(controller.store) == 1
        task = controller.store[0]
        assert task.title == "tea"
        assert task.description == "green"
        assert task.duration == timedelta(hours=5)

    def test_cycle_status(self) -> None:
        controller = Controller(JsonTaskStore([make_task("a")]))

        drive(controller, "down", "enter", "enter")

        assert controller.store[0].status is Status.COMPLETE

    def test_invalid_span_keeps_compose_screen(self) -> None:
        controller = Controller(JsonTaskStore())

        async def scenario() -> None:
            app = TrackerApp(controller)
            async with app.run_test() as pilot:
                await pilot.press("n", "x", "tab", "a", "b", "c", "enter")
                await pilot.pause()
                assert isinstance(app.screen, ComposeScreen)
                await pilot.press("escape")
                await pilot.pause()
                assert isinstance(app.screen, TaskListScreen)

        asyncio.run(scenario())

        assert controller.state is ViewState.LIST
        assert len(controller.store) == 0

    def test_invalid_span_marks_field(self) -> None:
        controller = Controller(JsonTaskStore())

        drive(controller, "n", "x", "tab", "a", "enter")

        assert controller.state is ViewState.COMPOSE
        assert controller.form.state(Field.DURATION) is FieldState.INVALID

    def test_details_overlay(self) -> None:
        controller = Controller(JsonTaskStore([make_task("a", description="d")]))

        drive(controller, "down", "space")

        assert controller.show_details is True
        assert controller.selected == 0


class TestRun:
    """Tests for run() persistence at teardown."""

    def test_saves_after_app_exits(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        JsonTaskStore([make_task("a")]).save(path)

        def fake_run(self) -> None:
            self.controller.store.advance(0)
            self.controller.store.append(make_task("b"))

        with patch.object(TrackerApp, "run", fake_run):
            run(path)

        loaded = JsonTaskStore.load(path)
        assert [t.title for t in loaded] == ["a", "b"]
        assert loaded[0].status is Status.IN_PROGRESS

    def test_saves_even_when_app_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"

        def failing_run(self) -> None:
            self.controller.store.append(make_task("kept"))
            raise RuntimeError("terminal went away")

        with patch.object(TrackerApp, "run", failing_run):
            with pytest.raises(RuntimeError):
                run(path)

        assert [t.title for t in JsonTaskStore.load(path)] == ["kept"]


class TestMain:
    """Tests for the CLI entry point."""

    def test_corrupt_file_exits_nonzero(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "tasks.json"
        path.write_text("not json")

        with patch.object(app_module, "setup_logging"):
            code = main(["--file", str(path)])

        assert code == 1
        assert "Error:" in capsys.readouterr().err
        assert path.read_text() == "not json"

    def test_uses_file_flag(self, tmp_path: Path) -> None:
        path = tmp_path / "mine.json"
        seen = []

        with patch.object(app_module, "setup_logging"), patch.object(
            app_module, "run", side_effect=seen.append
        ):
            code = main(["--file", str(path)])

        assert code == 0
        assert seen == [path]

    def test_env_default_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "env.json"
        monkeypatch.setenv("TASKTUI_FILE", str(path))
        seen = []

        with patch.object(app_module, "setup_logging"), patch.object(
            app_module, "run", side_effect=seen.append
        ):
            main([])

        assert seen == [path]

    def test_first_run_creates_file(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"

        with patch.object(app_module, "setup_logging"), patch.object(
            TrackerApp, "run", lambda self: None
        ):
            assert main(["--file", str(path)]) == 0

        assert json.loads(path.read_text()) == []
