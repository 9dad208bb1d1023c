# src/todo_cli/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .task_models import UPDATABLE_FIELDS, Result, Task, TaskError, coerce_field

logger = logging.getLogger(__name__)


class TaskStoreWriteError(OSError):
    """Raised when the task file cannot be written."""


def _now() -> datetime:
    return datetime.now(UTC)


class TaskRepository:
    """
    JSON-file task store.

    The whole list lives in memory and is rewritten to disk after every mutation:
    - load once at construction (missing/broken file -> empty store)
    - save writes a sibling temp file, then os.replace() over the original

    Concurrency:
    - single writer assumed; no file locking, so two processes saving
      the same file can lose each other's update
    """

    def __init__(self, file_path: str | Path = "tasks.json") -> None:
        self._path = Path(file_path)
        self._tasks: list[Task] = self.load()
        logger.info("TaskRepository ready file=%s total=%d", self._path, len(self._tasks))

    # ---- persistence ----

    def load(self) -> list[Task]:
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except FileNotFoundError:
            logger.info("Task file %s does not exist yet; starting empty.", self._path)
            return []
        except (OSError, ValueError):
            logger.exception("Error loading tasks from %s", self._path)
            return []

        if not isinstance(data, list):
            logger.error("Error loading tasks from %s: expected a JSON array", self._path)
            return []

        tasks: list[Task] = []
        for raw in data:
            if not isinstance(raw, dict):
                logger.warning("Skipping non-object task entry in %s: %r", self._path, raw)
                continue
            try:
                tasks.append(Task.from_dict(raw))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed task entry in %s: %r", self._path, raw)
        return tasks

    def save(self) -> None:
        payload = json.dumps([t.to_dict() for t in self._tasks], ensure_ascii=False, indent=2)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            logger.error("Failed to save tasks to %s: %s", self._path, e)
            raise TaskStoreWriteError(f"could not write {self._path}: {e}") from e
        logger.debug("Saved %d tasks to %s", len(self._tasks), self._path)

    # ---- queries ----

    def all(self) -> list[Task]:
        return list(self._tasks)

    def count(self) -> int:
        return len(self._tasks)

    def resolve_id_prefix(self, prefix: Any) -> Result[Task]:
        """
        Resolve a short id prefix to exactly one task.

        - non-string prefix   -> INVALID_ID
        - no task matches     -> NOT_FOUND
        - several tasks match -> AMBIGUOUS_PREFIX (never guesses)
        - one match           -> that task object (mutable, not a copy)

        Matching is case-sensitive; an empty prefix matches every task.
        """
        if not isinstance(prefix, str):
            logger.debug("Rejected non-string id prefix %r", prefix)
            return Result.failure(TaskError.INVALID_ID)

        matches = [t for t in self._tasks if t.id.startswith(prefix)]

        if not matches:
            logger.debug("No task with id starting with %r", prefix)
            return Result.failure(TaskError.NOT_FOUND)
        if len(matches) > 1:
            logger.debug("%d tasks with id starting with %r", len(matches), prefix)
            return Result.failure(TaskError.AMBIGUOUS_PREFIX)

        return Result.success(matches[0])

    # ---- mutations ----
    # A failed save() restores the previous in-memory state before re-raising.

    def add(self, task: Task) -> bool:
        if any(t.id == task.id for t in self._tasks):
            logger.info("Task with id %s already exists; not added.", task.id)
            return False

        self._tasks.append(task)
        try:
            self.save()
        except TaskStoreWriteError:
            self._tasks.pop()
            raise
        logger.debug("Task added id=%s title=%r", task.id, task.title)
        return True

    def delete(self, prefix: Any) -> bool:
        res = self.resolve_id_prefix(prefix)
        if res.value is None:
            return False

        target = res.value
        previous = self._tasks
        self._tasks = [t for t in self._tasks if t.id != target.id]
        try:
            self.save()
        except TaskStoreWriteError:
            self._tasks = previous
            raise
        logger.debug("Task deleted id=%s", target.id)
        return True

    def update(self, prefix: Any, fields: dict[str, Any]) -> bool:
        """
        Apply a partial update to the task the prefix resolves to.

        Values are coerced to the stored types first (ISO strings -> datetime,
        numeric strings -> int). A value that can't be coerced raises ValueError
        before anything is changed.
        """
        res = self.resolve_id_prefix(prefix)
        if res.value is None:
            return False

        task = res.value
        changes: dict[str, Any] = {}
        for name, value in fields.items():
            if name not in UPDATABLE_FIELDS:
                logger.debug("Ignoring non-updatable field %r for task %s", name, task.id)
                continue
            changes[name] = coerce_field(name, value)

        # Current time wins even if the caller supplied updated_at.
        changes["updated_at"] = _now()

        previous = {name: getattr(task, name) for name in changes}
        for name, value in changes.items():
            setattr(task, name, value)
        try:
            self.save()
        except TaskStoreWriteError:
            for name, value in previous.items():
                setattr(task, name, value)
            raise
        logger.debug("Task updated id=%s fields=%s", task.id, sorted(fields))
        return True
