# src/todo_desk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures local (gitignored) directories exist,
- loads saved tasks once and wires TaskStore + TaskFileGateway into AppState,
- writes the task file back exactly once at shutdown.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskGateway
from ..core.state import AppState, ViewState
from ..tasks.task_file import PersistenceError, TaskFileGateway
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, gateway: TaskGateway | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the gateway) injectable makes the app easier to test
    and avoids hidden global config reads. If settings is None, falls back to
    get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if gateway is None:
        gateway = TaskFileGateway(settings.tasks_path)

    store = TaskStore(gateway.load())
    logger.info("Task list ready: %d tasks (%s)", len(store), gateway.path)

    return AppState(
        settings=settings,
        store=store,
        gateway=gateway,
        view=ViewState(dark_mode=bool(getattr(settings, "dark_mode", False))),
    )


def shutdown(state: AppState) -> bool:
    """
    Save the whole task list once. Returns True if the file was written.

    A failed save is logged and swallowed: the process must still exit, and
    the on-disk list simply stays at its previous contents.
    """
    if state.saved:
        return False
    state.saved = True

    try:
        state.gateway.save(state.store.tasks)
    except PersistenceError:
        logger.exception("Failed to save tasks; changes from this session are lost.")
        return False
    return True
