# src/todo_desk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the front end.

The console and the lifecycle code depend on Protocols instead of concrete
implementations, so tests can swap in in-memory fakes.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol


class TaskRepo(Protocol):
    """Mutable task list as seen by the front end (TaskStore)."""

    @property
    def tasks(self) -> tuple[Any, ...]: ...

    def __len__(self) -> int: ...
    def add(self, title: str | None, due_date_text: str | None, priority: Any) -> Any: ...
    def delete_at(self, index: int | None) -> None: ...
    def mark_done_at(self, index: int | None) -> None: ...
    def filter(self, query: str | None) -> tuple[Any, ...]: ...
    def positions(self, query: str | None) -> list[int]: ...
    def count_completed(self) -> int: ...


class TaskGateway(Protocol):
    """Whole-list load/save boundary (TaskFileGateway)."""

    @property
    def path(self) -> Path: ...

    def save(self, tasks: Iterable[Any], destination: str | Path | None = None) -> None: ...
    def load(self, source: str | Path | None = None) -> list[Any]: ...
