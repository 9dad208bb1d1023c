# tests/test_task_store.py

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from todo_cli.tasks.task_models import TaskError
from todo_cli.tasks.task_store import TaskRepository, TaskStoreWriteError

from .fakes import OLD, FailingSaveRepository, make_task


def test_missing_file_starts_empty(tmp_path: Path) -> None:
    repo = TaskRepository(tmp_path / "tasks.json")
    assert repo.count() == 0
    assert repo.all() == []


@pytest.mark.parametrize("content", ["", "{broken", '{"id": "abc"}'])
def test_malformed_file_degrades_to_empty(tmp_path: Path, content: str) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(content, "utf-8")
    assert TaskRepository(path).count() == 0


def test_add_rejects_duplicate_id_without_persisting(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    repo = TaskRepository(path)

    assert repo.add(make_task("abc123", title="Buy milk")) is True
    assert repo.count() == 1
    assert path.exists()

    path.unlink()
    assert repo.add(make_task("abc123", title="Other")) is False
    assert repo.count() == 1
    assert repo.all()[0].title == "Buy milk"
    assert not path.exists()


def test_resolve_prefix_unique_ambiguous_and_missing(repo: TaskRepository) -> None:
    repo.add(make_task("abc123"))
    repo.add(make_task("abcd99"))

    assert repo.resolve_id_prefix("abc").error is TaskError.AMBIGUOUS_PREFIX
    assert repo.resolve_id_prefix("").error is TaskError.AMBIGUOUS_PREFIX

    res = repo.resolve_id_prefix("abc1")
    assert res.ok
    assert res.value.id == "abc123"

    assert repo.resolve_id_prefix("zzz").error is TaskError.NOT_FOUND
    assert repo.resolve_id_prefix("ABC1").error is TaskError.NOT_FOUND


def test_resolve_rejects_non_string_prefix(repo: TaskRepository) -> None:
    repo.add(make_task("123abc"))
    assert repo.resolve_id_prefix(123).error is TaskError.INVALID_ID
    assert repo.resolve_id_prefix(None).error is TaskError.INVALID_ID


def test_empty_prefix_matches_single_task(repo: TaskRepository) -> None:
    repo.add(make_task("only1"))
    assert repo.resolve_id_prefix("").value.id == "only1"


def test_resolve_returns_stored_object(repo: TaskRepository) -> None:
    repo.add(make_task("abc123"))
    first = repo.resolve_id_prefix("abc").value
    second = repo.resolve_id_prefix("abc123").value
    assert first is second


def test_update_applies_partial_fields_and_keeps_identity(repo: TaskRepository) -> None:
    repo.add(make_task("abc123", title="Buy milk"))
    supplied = datetime(2000, 1, 1, tzinfo=UTC)

    ok = repo.update(
        "abc1",
        {
            "title": "Buy oat milk",
            "id": "hijacked",
            "created_at": supplied,
            "updated_at": supplied,
        },
    )

    assert ok is True
    task = repo.resolve_id_prefix("abc123").value
    assert task.title == "Buy oat milk"
    assert task.description == "Buy milk description"
    assert task.id == "abc123"
    assert task.created_at == OLD
    assert task.updated_at > OLD
    assert task.updated_at != supplied


def test_update_unresolved_prefix_returns_false(repo: TaskRepository) -> None:
    repo.add(make_task("abc123"))
    repo.add(make_task("abcd99"))

    assert repo.update("abc", {"title": "x"}) is False
    assert repo.update("zzz", {"title": "x"}) is False
    assert all(t.title == "task" for t in repo.all())


def test_delete_removes_exactly_one(repo: TaskRepository) -> None:
    for tid in ("abc123", "abcd99", "ff0011"):
        repo.add(make_task(tid))

    assert repo.delete("abc") is False
    assert repo.count() == 3

    assert repo.delete("abc1") is True
    assert repo.count() == 2
    assert {t.id for t in repo.all()} == {"abcd99", "ff0011"}


def test_delete_failure_does_not_persist(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    repo = TaskRepository(path)
    repo.add(make_task("abc123"))
    path.unlink()

    assert repo.delete("zzz") is False
    assert not path.exists()


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    repo = TaskRepository(path)
    repo.add(make_task("abc123", title="Buy milk", status_id=2, priority_id=3))
    repo.add(make_task("ff0011", title="Call mom"))
    repo.update("ff", {"title": "Call mom back"})

    reloaded = TaskRepository(path)

    assert reloaded.all() == repo.all()

    raw = json.loads(path.read_text("utf-8"))
    assert set(raw[0]) == {
        "id",
        "title",
        "description",
        "created_at",
        "updated_at",
        "due",
        "status_id",
        "priority_id",
    }
    assert raw[0]["created_at"] == OLD.isoformat()


def test_load_accepts_javascript_timestamps_and_legacy_keys(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "a1b2c3",
                    "title": "Legacy",
                    "description": "",
                    "created_at": "2024-05-01T10:00:00.000Z",
                    "last_updated_at": "2024-05-02T10:00:00.000Z",
                    "due": "2024-05-03T17:00:00.000Z",
                    "status_id": 1,
                },
                {"id": 7, "title": "bad id"},
            ]
        ),
        "utf-8",
    )

    repo = TaskRepository(path)

    assert repo.count() == 1
    task = repo.all()[0]
    assert task.updated_at == datetime(2024, 5, 2, 10, 0, tzinfo=UTC)
    assert task.priority_id == 1


def test_save_failure_is_raised(tmp_path: Path) -> None:
    # A directory where the file should be makes the final replace fail.
    path = tmp_path / "tasks.json"
    path.mkdir()
    repo = TaskRepository(path)

    with pytest.raises(TaskStoreWriteError):
        repo.add(make_task("abc123"))


def test_failed_save_leaves_memory_unchanged(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    TaskRepository(path).add(make_task("abc123", title="before"))
    repo = FailingSaveRepository(path)

    with pytest.raises(TaskStoreWriteError):
        repo.add(make_task("ff99"))
    assert [t.id for t in repo.all()] == ["abc123"]

    with pytest.raises(TaskStoreWriteError):
        repo.update("abc", {"title": "after", "status_id": 3})
    task = repo.resolve_id_prefix("abc").value
    assert task.title == "before"
    assert task.status_id == 1
    assert task.updated_at == OLD

    with pytest.raises(TaskStoreWriteError):
        repo.delete("abc")
    assert [t.id for t in repo.all()] == ["abc123"]


def test_update_coerces_json_style_values(repo: TaskRepository, settings) -> None:
    repo.add(make_task("abc123"))

    assert repo.update("abc", {"due": "2030-01-01T10:00:00Z", "status_id": "3"}) is True

    task = repo.resolve_id_prefix("abc").value
    assert task.due == datetime(2030, 1, 1, 10, 0, tzinfo=UTC)
    assert task.status_id == 3
    stored = json.loads(settings.tasks_path.read_text("utf-8"))
    assert stored[0]["due"] == "2030-01-01T10:00:00+00:00"
    assert stored[0]["status_id"] == 3


@pytest.mark.parametrize(
    "fields",
    [{"due": "next tuesday"}, {"status_id": "done"}, {"priority_id": None}, {"title": "x", "due": 5}],
)
def test_update_rejects_unconvertible_values(repo: TaskRepository, fields: dict) -> None:
    repo.add(make_task("abc123", title="before"))

    with pytest.raises(ValueError):
        repo.update("abc", fields)

    task = repo.resolve_id_prefix("abc").value
    assert task.title == "before"
    assert task.updated_at == OLD


def test_load_keeps_zero_catalog_ids(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    row = make_task("abc123").to_dict() | {"status_id": 0, "priority_id": 0}
    path.write_text(json.dumps([row]), "utf-8")

    task = TaskRepository(path).resolve_id_prefix("abc").value

    assert task.status_id == 0
    assert task.priority_id == 0
