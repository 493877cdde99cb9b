# tests/test_task_file.py

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

import pytest

from todo_desk.tasks.task_file import PersistenceError, TaskFileGateway
from todo_desk.tasks.task_models import Priority, Task


def _tasks() -> list[Task]:
    return [
        Task(title="Buy milk", due_date=date(2024, 3, 1), priority=Priority.MEDIUM, completed=True),
        Task(title="Zahlen: Miete ✓", due_date=date(2024, 2, 29), priority=Priority.HIGH),
        Task(title="Buy milk", due_date=date(2030, 12, 31), priority=Priority.LOW),
    ]


def test_save_then_load_round_trips_all_fields(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    gw = TaskFileGateway(path)

    gw.save(_tasks())

    assert gw.load() == _tasks()


def test_save_writes_versioned_records(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "tasks.json"
    TaskFileGateway(path).save(_tasks()[:1])

    data = json.loads(path.read_text("utf-8"))
    assert data == {
        "version": 1,
        "tasks": [
            {"title": "Buy milk", "completed": True, "due_date": "2024-03-01", "priority": "MEDIUM"}
        ],
    }
    assert not path.with_name("tasks.json.tmp").exists()


def test_save_overwrites_existing_content(tmp_path: Path) -> None:
    gw = TaskFileGateway(tmp_path / "tasks.json")
    gw.save(_tasks())
    gw.save(_tasks()[1:2])
    assert gw.load() == _tasks()[1:2]


def test_explicit_destination_and_source_override_configured_path(tmp_path: Path) -> None:
    gw = TaskFileGateway(tmp_path / "default.json")
    other = tmp_path / "other.json"

    gw.save(_tasks(), other)

    assert not gw.path.exists()
    assert gw.load(other) == _tasks()


def test_save_to_unwritable_path_raises_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file in the way", "utf-8")
    gw = TaskFileGateway(blocker / "tasks.json")

    with pytest.raises(PersistenceError) as excinfo:
        gw.save(_tasks())

    assert isinstance(excinfo.value, OSError)
    assert excinfo.value.__cause__ is not None


def test_load_missing_file_returns_empty(tmp_path: Path) -> None:
    assert TaskFileGateway(tmp_path / "absent.json").load() == []


@pytest.mark.parametrize(
    "content",
    [
        "",
        "   \n",
        "{not json",
        "\xac\xed\x00\x05sr\x00\x13java.util.ArrayList",
        "[]",
        '{"version": 2, "tasks": []}',
        '{"tasks": []}',
        '{"version": 1, "tasks": {"title": "x"}}',
    ],
)
def test_load_corrupt_or_foreign_file_returns_empty(tmp_path: Path, content: str) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(content, "utf-8")
    assert TaskFileGateway(path).load() == []


def test_load_binary_garbage_returns_empty(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_bytes(b"\xff\xfe\x00\x81garbage")
    assert TaskFileGateway(path).load() == []


def test_load_skips_malformed_records(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "tasks.json"
    good = {"title": "Keep me", "completed": False, "due_date": "2024-03-01", "priority": "LOW"}
    path.write_text(
        json.dumps(
            {
                "version": 1,
                "tasks": [
                    good,
                    {"title": "Bad date", "completed": False, "due_date": "soon", "priority": "LOW"},
                    {"title": "Bad prio", "completed": False, "due_date": "2024-03-01", "priority": "URGENT"},
                    {"title": "", "completed": False, "due_date": "2024-03-01", "priority": "LOW"},
                    {"completed": "yes"},
                    "just a string",
                ],
            }
        ),
        "utf-8",
    )

    with caplog.at_level(logging.WARNING, logger="todo_desk.tasks.task_file"):
        loaded = TaskFileGateway(path).load()

    assert loaded == [Task(title="Keep me", due_date=date(2024, 3, 1), priority=Priority.LOW)]
    assert sum("Skipping malformed task record" in r.getMessage() for r in caplog.records) == 5


def test_load_deeply_nested_json_returns_empty(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("[" * 200000 + "]" * 200000, "utf-8")
    assert TaskFileGateway(path).load() == []


def test_unencodable_title_fails_save_cleanly(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    gw = TaskFileGateway(path)
    gw.save(_tasks())

    bad = Task(title="bad \udcff title", due_date=date(2024, 3, 1), priority=Priority.LOW)
    with pytest.raises(PersistenceError):
        gw.save([bad])

    assert not path.with_name("tasks.json.tmp").exists()
    assert gw.load() == _tasks()
