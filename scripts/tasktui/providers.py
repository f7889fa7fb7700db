"""
Data model for the task tracker.

Protocols define the store interface; the JSON implementation lives in
state_provider.py and can be swapped for testing.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Protocol


class TaskTrackerError(Exception):
    """Base class for task tracker errors."""


class Status(str, Enum):
    """Task status. Values are the tags written to the tasks file."""

    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    COMPLETE = "Complete"
    OVERDUE = "Overdue"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    def next(self) -> Status:
        """Return the following status in the cycle."""
        order = list(Status)
        return order[(order.index(self) + 1) % len(order)]


STATUS_LABELS = {
    Status.NOT_STARTED: "Not Started",
    Status.IN_PROGRESS: "In Progress",
    Status.COMPLETE: "Complete",
    Status.OVERDUE: "Overdue",
}


@dataclass
class Task:
    """A unit of work. Only `status` changes after creation."""

    created: datetime
    duration: timedelta
    title: str
    description: str = ""
    status: Status = Status.NOT_STARTED

    @property
    def due(self) -> datetime:
        return self.created + self.duration

    def advance(self) -> Status:
        self.status = self.status.next()
        return self.status


class TaskStore(Protocol):
    """Protocol for the ordered task collection."""

    def __len__(self) -> int:
        ...

    def __iter__(self) -> Iterator[Task]:
        ...

    def __getitem__(self, index: int) -> Task:
        ...

    def append(self, task: Task) -> None:
        """Add a task at the end."""
        ...

    def advance(self, index: int) -> Status:
        """Advance the status of the task at index."""
        ...
