# src/todo_desk/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

# date.fromisoformat also accepts "20240301" and week dates; the form only takes YYYY-MM-DD.
ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class TodoError(Exception):
    """Base class for all todo-desk errors."""


class ValidationError(TodoError, ValueError):
    """User input rejected at task creation; the store is left unchanged."""


class Priority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @classmethod
    def parse(cls, raw: Priority | str | None) -> Priority:
        """
        Accept a Priority or its name in any case ("high", "High", "HIGH").

        Raises ValidationError for anything else.
        """
        if isinstance(raw, Priority):
            return raw
        text = (raw or "").strip().upper()
        try:
            return cls(text)
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValidationError(f"Unknown priority {raw!r}. Use one of: {choices}.") from None


def parse_due_date(text: str | None) -> date:
    text = (text or "").strip()
    if not text:
        raise ValidationError("Please fill in both title and date.")
    if not ISO_DATE_RE.fullmatch(text):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.") from None


@dataclass(frozen=True, slots=True)
class Task:
    title: str
    due_date: date
    priority: Priority
    completed: bool = False

    @classmethod
    def create(cls, title: str | None, due_date_text: str | None, priority: Priority | str) -> Task:
        """Validate raw form input and build a new, not-yet-completed task."""
        clean_title = (title or "").strip()
        if not clean_title:
            raise ValidationError("Please fill in both title and date.")
        try:
            clean_title.encode("utf-8")
        except UnicodeEncodeError:
            raise ValidationError("Title contains characters that cannot be saved.") from None
        due = parse_due_date(due_date_text)
        return cls(title=clean_title, due_date=due, priority=Priority.parse(priority))
