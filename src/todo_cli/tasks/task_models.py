# src/todo_cli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# Fields a partial update may touch. id and created_at are never overwritten.
UPDATABLE_FIELDS = frozenset(
    {"title", "description", "due", "updated_at", "status_id", "priority_id"}
)


class TaskError(StrEnum):
    """
    Expected failure kinds surfaced to callers as Result values.

    Notes:
    - NOT_FOUND and AMBIGUOUS_PREFIX are always reported separately.
    - IO_ERROR covers write failures; load failures degrade to empty instead.
    """

    INVALID_ID = "invalid_id"
    NOT_FOUND = "not_found"
    AMBIGUOUS_PREFIX = "ambiguous_prefix"
    DUPLICATE_ID = "duplicate_id"
    IO_ERROR = "io_error"
    UNKNOWN_STATUS = "unknown_status"
    INVALID_FIELD = "invalid_field"

    @property
    def message_key(self) -> str:
        return _MESSAGE_KEYS[self]


_MESSAGE_KEYS: dict[TaskError, str] = {
    TaskError.INVALID_ID: "general.invalidId",
    TaskError.NOT_FOUND: "general.taskNotFound",
    TaskError.AMBIGUOUS_PREFIX: "general.ambiguousId",
    TaskError.DUPLICATE_ID: "create.duplicate",
    TaskError.IO_ERROR: "general.ioError",
    TaskError.UNKNOWN_STATUS: "general.unknownStatus",
    TaskError.INVALID_FIELD: "general.invalidField",
}


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    value: T | None = None
    error: TaskError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: TaskError) -> Result[T]:
        return cls(error=error)


@dataclass(frozen=True, slots=True)
class CatalogRecord:
    """One row of the Status or Priority catalog."""

    id: int
    name: str
    label: str
    icon: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> CatalogRecord:
        return cls(
            id=int(raw["id"]),
            name=str(raw["name"]),
            label=str(raw.get("label") or raw["name"]),
            icon=str(raw.get("icon") or ""),
        )


def parse_timestamp(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    s = str(raw).strip()
    # JSON written by JavaScript tools ends with "Z".
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s)


_TIMESTAMP_FIELDS = frozenset({"due", "updated_at"})
_ID_FIELDS = frozenset({"status_id", "priority_id"})


def coerce_field(name: str, value: Any) -> Any:
    """
    Convert an update value to the attribute type Task stores.

    Accepts the JSON wire format too: ISO-8601 strings for timestamps,
    numeric strings for catalog ids. Raises ValueError when it can't.
    """
    if name in _TIMESTAMP_FIELDS:
        try:
            return parse_timestamp(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{name}: not a timestamp: {value!r}") from e

    if name in _ID_FIELDS:
        if isinstance(value, bool):
            raise ValueError(f"{name}: not an integer id: {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{name}: not an integer id: {value!r}") from e

    return "" if value is None else str(value)


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str
    created_at: datetime
    updated_at: datetime
    due: datetime

    status_id: int = 1
    priority_id: int = 1

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        task_id = raw["id"]
        if not isinstance(task_id, str) or not task_id:
            raise ValueError(f"task id must be a non-empty string, got {task_id!r}")
        # Older files used "last_updated_at".
        updated_raw = raw.get("updated_at") or raw.get("last_updated_at") or raw["created_at"]
        return cls(
            id=task_id,
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            created_at=parse_timestamp(raw["created_at"]),
            updated_at=parse_timestamp(updated_raw),
            due=parse_timestamp(raw["due"]),
            status_id=int(raw.get("status_id", 1)),
            priority_id=int(raw.get("priority_id", 1)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "due": self.due.isoformat(),
            "status_id": self.status_id,
            "priority_id": self.priority_id,
        }


@dataclass(frozen=True, slots=True)
class MergedTask:
    """Read-only view: a task plus its resolved catalog records (None = not available)."""

    task: Task
    status: CatalogRecord | None
    priority: CatalogRecord | None

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        return self.task.title
