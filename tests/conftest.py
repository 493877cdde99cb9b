# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_desk.cli.bootstrap import create_initial_state
from todo_desk.core.state import AppState


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the front end.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="Test To-Do",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "data" / "tasks.json",
        dark_mode=False,
        color=False,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired through the real composition root.

    NOTE: We keep the real JSON gateway here because the load/save contract
    is part of what we want to test.
    """
    return create_initial_state(settings=settings)
