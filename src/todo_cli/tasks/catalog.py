# src/todo_cli/tasks/catalog.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from .task_models import CatalogRecord

logger = logging.getLogger(__name__)

DEFAULT_STATUS_PATH = Path("/etc/todo/status.json")
DEFAULT_PRIORITY_PATH = Path("/etc/todo/priority.json")


class ReferenceCatalog:
    """
    Small read-only reference table (statuses or priorities).

    Loaded once from a JSON array of {id, name, label, icon}.
    Any load failure leaves the catalog empty; lookups then report None.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        records: Iterable[CatalogRecord] | None = None,
        kind: str = "catalog",
    ) -> None:
        self._kind = kind
        self._path = Path(path) if path is not None else None
        if records is not None:
            self._records = list(records)
        elif self._path is not None:
            self._records = self.load(self._path)
        else:
            self._records = []
        logger.debug("%s ready path=%s total=%d", kind, self._path, len(self._records))

    def load(self, path: Path) -> list[CatalogRecord]:
        try:
            data = json.loads(path.read_text("utf-8"))
        except FileNotFoundError:
            logger.error("Could not load %s from %s: file not found", self._kind, path)
            return []
        except (OSError, ValueError):
            logger.exception("Could not load %s from %s", self._kind, path)
            return []

        if not isinstance(data, list):
            logger.error("Could not load %s from %s: expected a JSON array", self._kind, path)
            return []

        out: list[CatalogRecord] = []
        for raw in data:
            if not isinstance(raw, dict):
                logger.warning("Skipping non-object %s entry in %s: %r", self._kind, path, raw)
                continue
            try:
                out.append(CatalogRecord.from_dict(raw))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed %s entry in %s: %r", self._kind, path, raw)
        return out

    def get_by_id(self, record_id: int) -> CatalogRecord | None:
        for rec in self._records:
            if rec.id == record_id:
                return rec
        return None

    def get_by_name(self, name: str) -> CatalogRecord | None:
        for rec in self._records:
            if rec.name == name:
                return rec
        return None

    def get_all(self) -> list[CatalogRecord]:
        """Records in file order (not sorted by id)."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)


def load_status_catalog(path: str | Path = DEFAULT_STATUS_PATH) -> ReferenceCatalog:
    return ReferenceCatalog(path, kind="statuses")


def load_priority_catalog(path: str | Path = DEFAULT_PRIORITY_PATH) -> ReferenceCatalog:
    return ReferenceCatalog(path, kind="priorities")
