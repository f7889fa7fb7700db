"""New-task input form: three text buffers with focus and validity."""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from enum import Enum, IntEnum

from tasktui.providers import TaskTrackerError

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Largest value of a 32-bit signed span field.
MAX_HOURS = 2**31 - 1


class InvalidDurationError(TaskTrackerError, ValueError):
    """Duration buffer does not hold a usable number of hours."""


class Field(IntEnum):
    """Form fields, in focus order."""

    TITLE = 0
    DURATION = 1
    DESCRIPTION = 2

    @property
    def label(self) -> str:
        return FIELD_LABELS[self]


FIELD_LABELS = {
    Field.TITLE: "Title",
    Field.DURATION: "Span (hrs)",
    Field.DESCRIPTION: "Description",
}


class FieldState(Enum):
    UNTOUCHED = "untouched"
    VALID = "valid"
    INVALID = "invalid"


class InputForm:
    """Editable buffers addressed by the focused Field."""

    def __init__(self) -> None:
        self._buffers: list[str] = []
        self._states: list[FieldState] = []
        self._errors: list[str | None] = []
        self.focused: Field = Field.TITLE
        self.reset()

    def reset(self) -> None:
        """Clear all buffers and validity, focus the title."""
        self._buffers = [""] * len(Field)
        self._states = [FieldState.UNTOUCHED] * len(Field)
        self._errors = [None] * len(Field)
        self.focused = Field.TITLE

    def value(self, field: Field) -> str:
        return self._buffers[field]

    def state(self, field: Field) -> FieldState:
        return self._states[field]

    def error(self, field: Field) -> str | None:
        return self._errors[field]

    def insert(self, char: str) -> None:
        self._buffers[self.focused] += char

    def backspace(self) -> None:
        self._buffers[self.focused] = self._buffers[self.focused][:-1]

    def focus_next(self) -> Field:
        self.focused = Field((self.focused + 1) % len(Field))
        return self.focused

    def mark(
        self, field: Field, state: FieldState, message: str | None = None
    ) -> None:
        """Set the validity shown for field on the next render."""
        self._states[field] = state
        self._errors[field] = message if state is FieldState.INVALID else None

    def parse_hours(self) -> int:
        """Parse the duration buffer as a base-10 hour count.

        Raises InvalidDurationError for anything but a non-negative integer.
        """
        text = self.value(Field.DURATION)
        if not text:
            raise InvalidDurationError("cannot parse integer from empty string")
        if not _INTEGER_RE.fullmatch(text):
            raise InvalidDurationError(f"invalid digit found in {text!r}")
        hours = int(text)
        if hours < 0:
            raise InvalidDurationError("span cannot be negative")
        return hours

    def parse_span(self, now: datetime) -> timedelta:
        """Parse the duration buffer as a span starting at now.

        Also rejects spans whose due date falls outside the datetime range.
        """
        hours = self.parse_hours()
        if hours > MAX_HOURS:
            raise InvalidDurationError("span too large")
        try:
            span = timedelta(hours=hours)
            now + span
        except OverflowError as e:
            raise InvalidDurationError("span too large") from e
        return span
