# src/todo_desk/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.task_models import Priority, Task, ValidationError

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)

DONE_MARK = "✅"
OPEN_MARK = "🕒"


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        name, _, rest = line[1:].strip().partition(" ")
        if not name:
            return "Empty command. Use /help to list available commands."

        handler = self._handlers.get(name.lower())
        if not handler:
            return f"Unknown command: /{name.lower()}. Use /help to list available commands."

        return handler(state, rest.strip())

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def render_task(row: int, task: Task) -> str:
    mark = DONE_MARK if task.completed else OPEN_MARK
    return f"{row}. {mark} {task.title}  Due: {task.due_date.isoformat()} | Priority: {task.priority.value}"


def render_list(state: AppState) -> str:
    """Displayed list: the store filtered by the current search text, 1-based rows."""
    shown = state.store.filter(state.view.query)
    if not shown:
        if state.view.query:
            return f"No tasks match {state.view.query!r}."
        return "No tasks yet. Add one with /add <title> | <YYYY-MM-DD> | <priority>."

    lines = []
    for row, task in enumerate(shown, start=1):
        cursor = ">" if row == state.view.selected else " "
        lines.append(f"{cursor}{render_task(row, task)}")
    return "\n".join(lines)


def _parse_row(text: str) -> int | None:
    try:
        return int(text)
    except ValueError:
        return None


def cmd_help(state: AppState, arg: str) -> str:
    return registry.build_help()


def cmd_status(state: AppState, arg: str) -> str:
    total = len(state.store)
    done = state.store.count_completed()
    theme = "dark" if state.view.dark_mode else "light"
    query = state.view.query or "(none)"
    return (
        "Status:\n"
        f"  App: {getattr(state.settings, 'app_name', 'todo')}\n"
        f"  Tasks: {total} ({done} done, {total - done} open)\n"
        f"  Theme: {theme}\n"
        f"  Search: {query}\n"
        f"  File: {state.gateway.path}"
    )


def cmd_add(state: AppState, arg: str) -> str:
    """
    /add <title> | <YYYY-MM-DD> | <priority>
    Priority is optional and defaults to MEDIUM.
    """
    parts = [p.strip() for p in arg.split("|")]
    if len(parts) < 2 or len(parts) > 3:
        return "Usage: /add <title> | <YYYY-MM-DD> | <LOW|MEDIUM|HIGH>"

    title, date_text = parts[0], parts[1]
    priority = parts[2] if len(parts) == 3 and parts[2] else Priority.MEDIUM

    try:
        task = state.store.add(title, date_text, priority)
    except ValidationError as e:
        logger.debug("Rejected /add input: %s", e)
        return str(e)

    return f"Added: {task.title}\n{render_list(state)}"


def cmd_list(state: AppState, arg: str) -> str:
    return render_list(state)


def cmd_find(state: AppState, arg: str) -> str:
    """
    /find <text>  -> show only tasks whose title contains <text>
    /find         -> clear the search
    """
    state.view.query = arg
    # Filtering swaps the displayed rows, so the old selection no longer points anywhere useful.
    state.view.selected = None
    return render_list(state)


def cmd_select(state: AppState, arg: str) -> str:
    """
    /select <n>  -> select row n of the displayed list
    /select      -> clear the selection
    """
    if not arg:
        state.view.selected = None
        return "Selection cleared."

    row = _parse_row(arg)
    if row is None or state.selected_store_index(row) is None:
        return f"No row {arg} in the displayed list."

    state.view.selected = row
    return render_list(state)


def _target_index(state: AppState, arg: str) -> int | None:
    if arg:
        row = _parse_row(arg)
        return state.selected_store_index(row) if row is not None else None
    return state.selected_store_index()


def cmd_done(state: AppState, arg: str) -> str:
    index = _target_index(state, arg)
    if index is None:
        return "Nothing selected."
    state.store.mark_done_at(index)
    return render_list(state)


def cmd_delete(state: AppState, arg: str) -> str:
    index = _target_index(state, arg)
    if index is None:
        return "Nothing selected."
    state.store.delete_at(index)
    state.view.selected = None
    return render_list(state)


def cmd_theme(state: AppState, arg: str) -> str:
    dark = state.view.toggle_theme()
    logger.debug("Theme toggled dark_mode=%s", dark)
    return f"Theme: {'dark' if dark else 'light'} (toggle: {state.view.theme_button_label})"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task counts, theme, search and file.")
registry.register("add", cmd_add, help_text="Add a task: /add <title> | <YYYY-MM-DD> | <priority>.")
registry.register("list", cmd_list, help_text="Show the displayed (filtered) list.", aliases=["ls"])
registry.register(
    "find", cmd_find, help_text="Filter by title: /find <text> | /find to clear.", aliases=["search"]
)
registry.register(
    "select", cmd_select, help_text="Select a row: /select <n> | /select to clear.", aliases=["sel"]
)
registry.register("done", cmd_done, help_text="Mark the selected (or given) row done: /done [n].")
registry.register(
    "del", cmd_delete, help_text="Delete the selected (or given) row: /del [n].", aliases=["delete", "rm"]
)
registry.register("theme", cmd_theme, help_text="Toggle dark/light mode.")
