# src/todo_desk/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .ports import TaskGateway, TaskRepo


@dataclass(slots=True)
class ViewState:
    """
    Presentation-only state: theme, search box text and the selected row.

    `selected` is a 1-based row number in the currently displayed (filtered)
    list, or None when nothing is selected. The task store never sees it.
    """

    dark_mode: bool = False
    query: str = ""
    selected: int | None = None

    def toggle_theme(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    @property
    def theme_button_label(self) -> str:
        return "☀ Light Mode" if self.dark_mode else "🌙 Dark Mode"


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: TaskRepo
    gateway: TaskGateway
    view: ViewState = field(default_factory=ViewState)

    # Set by shutdown(); the task file is written at most once per run.
    saved: bool = False

    def selected_store_index(self, row: int | None = None) -> int | None:
        """
        Translate a displayed row (1-based; defaults to the current selection)
        into a store index. Returns None when the row does not exist.
        """
        if row is None:
            row = self.view.selected
        if row is None or row < 1:
            return None
        positions = self.store.positions(self.view.query)
        if row > len(positions):
            return None
        return positions[row - 1]
