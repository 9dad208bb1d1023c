# src/todo_cli/cli/prompts.py

"""
Interactive field collection for `todo --add` / `todo --update` / `todo --delete`.

Prompts go through an injectable `ask` callable (input() in production),
so the flows can be driven by scripted answers in tests.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..labels import label
from ..tasks.task_api import default_due
from ..tasks.task_models import MergedTask

Ask = Callable[[str], str]
Emit = Callable[[str], None]

DEFAULT_DUE_TIME = "17:00"
DEFAULT_PRIORITY_IDS = (1, 2, 3)


def _parse_int(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _local(dt: datetime) -> datetime:
    # Naive input is local wall time.
    return dt.astimezone()


def prompt_new_task(
    ask: Ask,
    emit: Emit,
    *,
    priority_ids: tuple[int, ...] = DEFAULT_PRIORITY_IDS,
    now: datetime | None = None,
) -> dict[str, Any] | None:
    """Collect fields for a new task. Returns None when the due date/time is invalid."""
    title = ask(label("create.title")).strip()
    description = ask(label("create.description")).strip()

    default_date = default_due(now).strftime("%Y-%m-%d")
    date_input = ask(label("create.dueDate", value=default_date)).strip() or default_date
    time_input = ask(label("create.dueTime", value=DEFAULT_DUE_TIME)).strip() or DEFAULT_DUE_TIME

    try:
        due = _local(datetime.strptime(f"{date_input}T{time_input}", "%Y-%m-%dT%H:%M"))
    except ValueError:
        emit(label("create.invalidDateTime"))
        return None

    raw_priority = ask(label("create.priority")).strip()
    priority_id = _parse_int(raw_priority) if raw_priority else 1
    if priority_id not in priority_ids:
        emit(label("create.invalidPriority"))
        priority_id = 1

    return {
        "title": title,
        "description": description,
        "due": due,
        "priority_id": priority_id,
    }


def prompt_task_updates(
    ask: Ask,
    emit: Emit,
    current: MergedTask,
    *,
    priority_ids: tuple[int, ...] = DEFAULT_PRIORITY_IDS,
) -> dict[str, Any]:
    """
    Ask for each editable field; empty input keeps the current value.
    Only fields the user actually changed are returned.
    """
    task = current.task
    emit(label("update.skipField"))

    fields: dict[str, Any] = {}

    title = ask(label("update.title", value=task.title)).strip()
    if title:
        fields["title"] = title

    description = ask(label("update.description", value=task.description)).strip()
    if description:
        fields["description"] = description

    due_input = ask(label("update.dueDate", value=task.due.strftime("%Y-%m-%d %H:%M"))).strip()
    if due_input:
        try:
            fields["due"] = _local(datetime.fromisoformat(due_input))
        except ValueError:
            emit(label("update.invalidDate"))

    priority_id = _parse_int(ask(label("update.priority", value=task.priority_id)))
    if priority_id in priority_ids and priority_id != task.priority_id:
        fields["priority_id"] = priority_id

    return fields


def confirm_delete(ask: Ask, current: MergedTask) -> bool:
    answer = ask(label("delete.confirm", title=current.task.title, id=current.task.id))
    return answer.strip().lower() == "y"
