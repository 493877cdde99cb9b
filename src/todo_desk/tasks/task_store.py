# src/todo_desk/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import replace

from .task_models import Priority, Task

logger = logging.getLogger(__name__)


def _matches(task: Task, needle: str) -> bool:
    return needle in task.title.lower()


def filter_tasks(query: str | None, tasks: Iterable[Task]) -> tuple[Task, ...]:
    """
    Case-insensitive title substring filter.

    An empty (or None) query keeps every task. The result is a fresh tuple,
    so callers cannot reach back into whatever produced `tasks`.
    """
    needle = (query or "").lower()
    if not needle:
        return tuple(tasks)
    return tuple(t for t in tasks if _matches(t, needle))


class TaskStore:
    """
    In-memory ordered task list.

    Insertion order is preserved and duplicates are allowed. Indices passed to
    delete_at / mark_done_at are positions in this store; None or anything out
    of range means "nothing selected" and is silently ignored.
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])
        logger.debug("TaskStore ready total=%s", len(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def _valid(self, index: int | None) -> bool:
        return index is not None and 0 <= index < len(self._tasks)

    # ---- mutations ----

    def add(self, title: str | None, due_date_text: str | None, priority: Priority | str) -> Task:
        task = Task.create(title, due_date_text, priority)
        self._tasks.append(task)
        logger.debug(
            "Task added index=%s title=%r due=%s priority=%s",
            len(self._tasks) - 1,
            task.title,
            task.due_date,
            task.priority,
        )
        return task

    def delete_at(self, index: int | None) -> None:
        if not self._valid(index):
            return
        removed = self._tasks.pop(index)  # type: ignore[arg-type]
        logger.debug("Task deleted index=%s title=%r", index, removed.title)

    def mark_done_at(self, index: int | None) -> None:
        if not self._valid(index):
            return
        task = self._tasks[index]  # type: ignore[index]
        if task.completed:
            return
        self._tasks[index] = replace(task, completed=True)  # type: ignore[index]
        logger.debug("Task completed index=%s title=%r", index, task.title)

    # ---- queries ----

    def filter(self, query: str | None) -> tuple[Task, ...]:
        return filter_tasks(query, self._tasks)

    def positions(self, query: str | None) -> list[int]:
        """
        Store indices of the rows filter(query) would return, in the same order.

        Used to map a selection in the displayed (filtered) list back to the store.
        """
        needle = (query or "").lower()
        return [i for i, t in enumerate(self._tasks) if not needle or _matches(t, needle)]

    def count_completed(self) -> int:
        return sum(1 for t in self._tasks if t.completed)
