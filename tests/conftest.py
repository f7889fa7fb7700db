"""Shared fixtures for tasktui tests."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from tasktui.providers import Status, Task  # noqa: E402
from tasktui.state_provider import JsonTaskStore  # noqa: E402

CREATED = datetime(2026, 10, 19, 9, 30, tzinfo=timezone(timedelta(hours=2)))


def make_task(title: str = "Buy milk", hours: int = 5, **kwargs) -> Task:
    kwargs.setdefault("created", CREATED)
    kwargs.setdefault("description", "")
    return Task(duration=timedelta(hours=hours), title=title, **kwargs)


@pytest.fixture
def store() -> JsonTaskStore:
    """Store with three tasks in different states."""
    return JsonTaskStore(
        [
            make_task("Buy milk", 5, description="2%"),
            make_task("Write report", 48, status=Status.IN_PROGRESS),
            make_task("File taxes", 0, status=Status.OVERDUE),
        ]
    )
