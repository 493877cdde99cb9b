# src/todo_desk/tasks/task_file.py

"""
Whole-list persistence to a single JSON file.

Layout (version 1):

    {"version": 1, "tasks": [
        {"title": "...", "completed": false, "due_date": "YYYY-MM-DD", "priority": "MEDIUM"}
    ]}

Saving writes a sibling temp file and os.replace()s it over the target, so a
reader never sees a half-written document. Loading never raises: a missing,
empty or unparseable file means "no saved tasks".
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any

from .task_models import Priority, Task, TodoError

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class PersistenceError(TodoError, OSError):
    """Saving the task file failed; the in-memory list is untouched."""


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "title": task.title,
        "completed": task.completed,
        "due_date": task.due_date.isoformat(),
        "priority": task.priority.value,
    }


def record_to_task(rec: Any) -> Task:
    """
    Decode one stored record. Raises ValueError/TypeError/KeyError on bad data.

    Stored values are checked strictly: they were written by task_to_record,
    so anything else means the file was edited or produced by something else.
    """
    if not isinstance(rec, dict):
        raise TypeError(f"task record must be an object, got {type(rec).__name__}")

    title = rec["title"]
    if not isinstance(title, str) or not title.strip():
        raise ValueError("task record has an empty title")

    completed = rec.get("completed", False)
    if not isinstance(completed, bool):
        raise TypeError("task record 'completed' must be a boolean")

    raw_due = rec["due_date"]
    if not isinstance(raw_due, str):
        raise TypeError("task record 'due_date' must be a string")

    return Task(
        title=title,
        due_date=date.fromisoformat(raw_due),
        priority=Priority(rec["priority"]),
        completed=completed,
    )


class TaskFileGateway:
    """Load/save boundary between TaskStore and the tasks file on disk."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, tasks: Iterable[Task], destination: str | Path | None = None) -> None:
        path = Path(destination) if destination is not None else self._path
        records = [task_to_record(t) for t in tasks]
        payload = {"version": FORMAT_VERSION, "tasks": records}
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, path)
        except (OSError, ValueError) as e:
            # ValueError covers text json can dump but utf-8 cannot encode (lone surrogates).
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                logger.debug("Could not remove temp file %s", tmp, exc_info=True)
            raise PersistenceError(f"Failed to save tasks to {path}: {e}") from e
        logger.info("Saved %d tasks to %s", len(records), path)

    def load(self, source: str | Path | None = None) -> list[Task]:
        path = Path(source) if source is not None else self._path
        if not path.exists():
            logger.info("No saved tasks found at %s", path)
            return []

        try:
            raw = path.read_text("utf-8")
        except (OSError, UnicodeDecodeError):
            logger.warning("Failed to read tasks file %s; starting empty.", path, exc_info=True)
            return []

        if not raw.strip():
            logger.info("Tasks file %s is empty", path)
            return []

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Tasks file %s is not valid JSON; starting empty.", path)
            return []

        if not isinstance(data, dict) or data.get("version") != FORMAT_VERSION:
            logger.warning("Tasks file %s has an unsupported format; starting empty.", path)
            return []

        records = data.get("tasks")
        if not isinstance(records, list):
            logger.warning("Tasks file %s has no task list; starting empty.", path)
            return []

        out: list[Task] = []
        for i, rec in enumerate(records):
            try:
                out.append(record_to_task(rec))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed task record #%d in %s: %s", i, path, e)

        logger.info("Loaded %d tasks from %s", len(out), path)
        return out
