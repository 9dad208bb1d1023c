# src/todo_cli/tasks/task_service.py

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any

from ..core.ports import Catalog, TaskRepo
from .catalog import load_priority_catalog, load_status_catalog
from .task_api import build_task
from .task_models import MergedTask, Result, Task, TaskError
from .task_store import TaskRepository, TaskStoreWriteError

logger = logging.getLogger(__name__)

LIST_ALL = "all"
STATUS_DONE = "done"
STATUS_IN_PROGRESS = "in-progress"


class TaskService:
    """
    Facade over the task repository and the two reference catalogs.

    Every operation returns a value or a Result; expected failures
    (bad prefix, duplicate id, bad field value, write failure) never raise.
    """

    def __init__(self, repo: TaskRepo, *, statuses: Catalog, priorities: Catalog) -> None:
        self.repo = repo
        self.statuses = statuses
        self.priorities = priorities

    # ---- views ----

    def merge(self, task: Task) -> MergedTask:
        return MergedTask(
            task=dataclasses.replace(task),
            status=self.statuses.get_by_id(task.status_id),
            priority=self.priorities.get_by_id(task.priority_id),
        )

    def detail(self, prefix: Any) -> Result[MergedTask]:
        res = self.repo.resolve_id_prefix(prefix)
        if res.value is None:
            return Result.failure(res.error or TaskError.NOT_FOUND)
        return Result.success(self.merge(res.value))

    def get_detail(self, prefix: Any) -> MergedTask | None:
        return self.detail(prefix).value

    def list(self, status_filter: str = LIST_ALL) -> list[MergedTask]:
        """
        "all" returns every task in store order. Any other value is a status name;
        tasks whose status_id does not resolve never match a named filter.
        """
        tasks = self.repo.all()
        if status_filter != LIST_ALL:
            kept: list[Task] = []
            for t in tasks:
                status = self.statuses.get_by_id(t.status_id)
                if status is not None and status.name == status_filter:
                    kept.append(t)
            tasks = kept
        return [self.merge(t) for t in tasks]

    # ---- mutations ----

    def create(self, fields: dict[str, Any], explicit_id: str | None = None) -> Result[MergedTask]:
        task = build_task(
            title=str(fields.get("title") or ""),
            description=str(fields.get("description") or ""),
            due=fields.get("due"),
            priority_id=fields.get("priority_id") or 1,
            status_id=fields.get("status_id") or 1,
            task_id=explicit_id,
        )
        try:
            added = self.repo.add(task)
        except TaskStoreWriteError:
            logger.exception("create failed to persist task id=%s", task.id)
            return Result.failure(TaskError.IO_ERROR)

        if not added:
            return Result.failure(TaskError.DUPLICATE_ID)
        logger.info("Created task id=%s", task.id)
        return Result.success(self.merge(task))

    def update(self, prefix: Any, fields: dict[str, Any]) -> Result[MergedTask]:
        res = self.repo.resolve_id_prefix(prefix)
        if res.value is None:
            return Result.failure(res.error or TaskError.NOT_FOUND)

        task = res.value
        try:
            self.repo.update(prefix, fields)
        except ValueError as e:
            logger.warning("Rejected update of task id=%s: %s", task.id, e)
            return Result.failure(TaskError.INVALID_FIELD)
        except TaskStoreWriteError:
            logger.exception("update failed to persist task id=%s", task.id)
            return Result.failure(TaskError.IO_ERROR)

        # task is the stored object, already mutated in place.
        return Result.success(self.merge(task))

    def delete(self, prefix: Any) -> Result[Task]:
        res = self.repo.resolve_id_prefix(prefix)
        if res.value is None:
            return Result.failure(res.error or TaskError.NOT_FOUND)

        task = res.value
        try:
            self.repo.delete(prefix)
        except TaskStoreWriteError:
            logger.exception("delete failed to persist removal of task id=%s", task.id)
            return Result.failure(TaskError.IO_ERROR)

        logger.info("Deleted task id=%s", task.id)
        return Result.success(task)

    def set_status(self, prefix: Any, status_name: str) -> Result[MergedTask]:
        status = self.statuses.get_by_name(status_name)
        if status is None:
            logger.warning("Status %r is not in the status catalog.", status_name)
            return Result.failure(TaskError.UNKNOWN_STATUS)
        return self.update(prefix, {"status_id": status.id})

    def finish(self, prefix: Any) -> Result[MergedTask]:
        return self.set_status(prefix, STATUS_DONE)

    def start(self, prefix: Any) -> Result[MergedTask]:
        return self.set_status(prefix, STATUS_IN_PROGRESS)


def new_task_service(
    task_file_path: str | Path,
    status_catalog_path: str | Path,
    priority_catalog_path: str | Path,
) -> TaskService:
    return TaskService(
        TaskRepository(task_file_path),
        statuses=load_status_catalog(status_catalog_path),
        priorities=load_priority_catalog(priority_catalog_path),
    )
