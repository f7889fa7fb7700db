"""
JSON file implementation of TaskStore.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta
from pathlib import Path

from tasktui.providers import Status, Task, TaskTrackerError

logger = logging.getLogger(__name__)

DEFAULT_FILE = Path("tasks.json")

# Fractional seconds beyond microseconds are valid ISO-8601 but not for
# older datetime.fromisoformat implementations.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


class StoreCorruptError(TaskTrackerError):
    """The tasks file exists but does not hold a valid task list."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def _parse_datetime(s: str) -> datetime:
    """Parse ISO datetime string with a UTC offset."""
    if not isinstance(s, str):
        raise TypeError(f"timestamp must be a string: {s!r}")
    value = datetime.fromisoformat(_FRACTION_RE.sub(r"\1", s.replace("Z", "+00:00")))
    if value.tzinfo is None:
        raise ValueError(f"timestamp without offset: {s!r}")
    return value


def _duration_to_dict(duration: timedelta) -> dict:
    secs, micros = divmod(duration // timedelta(microseconds=1), 1_000_000)
    return {"secs": secs, "nanos": micros * 1000}


def _duration_from_dict(data: dict) -> timedelta:
    """Build a timedelta from secs/nanos.

    timedelta has microsecond resolution, so nanos below 1000 are dropped;
    a value such as {"secs": 1, "nanos": 1500} saves back as nanos 1000.
    """
    secs = data["secs"]
    nanos = data.get("nanos", 0)
    if not isinstance(secs, int) or not isinstance(nanos, int):
        raise ValueError(f"duration must be integers: {data!r}")
    try:
        return timedelta(seconds=secs, microseconds=nanos // 1000)
    except OverflowError as e:
        raise ValueError(f"duration out of range: {data!r}") from e


def task_to_dict(task: Task) -> dict:
    """Convert Task to its JSON record."""
    return {
        "created": task.created.isoformat(),
        "duration": _duration_to_dict(task.duration),
        "title": task.title,
        "description": task.description,
        "status": task.status.value,
    }


def task_from_dict(data: dict) -> Task:
    """Convert a JSON record to Task. Raises ValueError/KeyError/TypeError."""
    title = data["title"]
    description = data["description"]
    if not isinstance(title, str) or not isinstance(description, str):
        raise TypeError("title and description must be strings")
    task = Task(
        created=_parse_datetime(data["created"]),
        duration=_duration_from_dict(data["duration"]),
        title=title,
        description=description,
        status=Status(data["status"]),
    )
    try:
        task.due
    except OverflowError as e:
        raise ValueError("due date out of range") from e
    return task


class JsonTaskStore:
    """TaskStore backed by a JSON array on disk."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = list(tasks)

    @classmethod
    def load(cls, path: Path = DEFAULT_FILE) -> JsonTaskStore:
        """Load tasks from path.

        A missing or unreadable file gives an empty store. Content that
        cannot be parsed raises StoreCorruptError.
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            logger.info("No tasks file at %s, starting empty", path)
            return cls()
        except OSError as e:
            logger.warning("Cannot read %s (%s), starting empty", path, e)
            return cls()

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StoreCorruptError(path, f"not UTF-8 text: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StoreCorruptError(path, f"invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise StoreCorruptError(path, "expected a JSON array of tasks")

        tasks = []
        for i, record in enumerate(data):
            if not isinstance(record, dict):
                raise StoreCorruptError(path, f"record {i} is not an object")
            try:
                tasks.append(task_from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                raise StoreCorruptError(path, f"record {i}: {e}") from e

        logger.info("Loaded %d task(s) from %s", len(tasks), path)
        return cls(tasks)

    def save(self, path: Path = DEFAULT_FILE) -> None:
        """Write all tasks to path, replacing it in one step."""
        path = Path(path)
        payload = json.dumps([task_to_dict(t) for t in self._tasks], indent=2)
        directory = path.resolve().parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info("Saved %d task(s) to %s", len(self._tasks), path)

    def append(self, task: Task) -> None:
        self._tasks.append(task)

    def advance(self, index: int) -> Status:
        """Advance the status of the task at index."""
        return self._tasks[index].advance()

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]
