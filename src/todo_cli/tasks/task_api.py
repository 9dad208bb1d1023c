# src/todo_cli/tasks/task_api.py

from __future__ import annotations

import hashlib
import random
import time
from datetime import UTC, datetime, timedelta

from .task_models import Task

DEFAULT_DUE_HOUR = 17


def generate_task_id() -> str:
    """SHA-1 hex digest of the current time (ms) plus a random float."""
    seed = f"{int(time.time() * 1000)}{random.random()}"
    return hashlib.sha1(seed.encode("utf-8")).hexdigest()


def default_due(now: datetime | None = None) -> datetime:
    """Tomorrow at 17:00 local time."""
    base = (now or datetime.now()).astimezone()
    tomorrow = base + timedelta(days=1)
    return tomorrow.replace(hour=DEFAULT_DUE_HOUR, minute=0, second=0, microsecond=0)


def build_task(
    *,
    title: str,
    description: str = "",
    due: datetime | None = None,
    priority_id: int = 1,
    status_id: int = 1,
    task_id: str | None = None,
    now: datetime | None = None,
) -> Task:
    """
    Convenience helper: a fresh Task with timestamps stamped to now.
    The id is generated unless task_id is given.
    """
    ts = now or datetime.now(UTC)
    return Task(
        id=task_id or generate_task_id(),
        title=title,
        description=description,
        created_at=ts,
        updated_at=ts,
        due=due or default_due(ts),
        status_id=int(status_id),
        priority_id=int(priority_id),
    )
