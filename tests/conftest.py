# tests/conftest.py

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_cli.cli.bootstrap import create_initial_state
from todo_cli.core.state import AppState
from todo_cli.tasks.catalog import ReferenceCatalog
from todo_cli.tasks.task_service import TaskService
from todo_cli.tasks.task_store import TaskRepository

from .fakes import PRIORITY_ROWS, STATUS_ROWS


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and command handlers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment.
    """
    data_dir = tmp_path / "data"
    status_path = tmp_path / "status.json"
    priority_path = tmp_path / "priority.json"
    status_path.write_text(json.dumps(STATUS_ROWS), "utf-8")
    priority_path.write_text(json.dumps(PRIORITY_ROWS), "utf-8")

    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        log_file_enabled=False,
        data_dir=data_dir,
        tasks_path=data_dir / "tasks.json",
        status_path=status_path,
        priority_path=priority_path,
    )


@pytest.fixture()
def repo(settings: SimpleNamespace) -> TaskRepository:
    return TaskRepository(settings.tasks_path)


@pytest.fixture()
def service(settings: SimpleNamespace, repo: TaskRepository) -> TaskService:
    return TaskService(
        repo,
        statuses=ReferenceCatalog(settings.status_path, kind="statuses"),
        priorities=ReferenceCatalog(settings.priority_path, kind="priorities"),
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState wired through the real composition root against tmp files."""
    return create_initial_state(settings=settings)
