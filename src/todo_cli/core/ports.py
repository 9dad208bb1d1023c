# src/todo_cli/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task service.

The service depends on Protocols instead of concrete implementations.
This keeps storage and reference catalogs swappable and makes testing easier.
"""

from typing import Any, Protocol

from ..tasks.task_models import CatalogRecord, Result, Task


class Catalog(Protocol):
    """Read-only reference table (statuses, priorities)."""

    def get_by_id(self, record_id: int) -> CatalogRecord | None: ...
    def get_by_name(self, name: str) -> CatalogRecord | None: ...
    def get_all(self) -> list[CatalogRecord]: ...


class TaskRepo(Protocol):
    # Queries
    def all(self) -> list[Task]: ...
    def count(self) -> int: ...
    def resolve_id_prefix(self, prefix: Any) -> Result[Task]: ...

    # Mutations (each persists the full list)
    def add(self, task: Task) -> bool: ...
    def delete(self, prefix: Any) -> bool: ...
    def update(self, prefix: Any, fields: dict[str, Any]) -> bool: ...
    def save(self) -> None: ...
