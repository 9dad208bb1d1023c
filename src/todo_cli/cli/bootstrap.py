# src/todo_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- wires the task repository and both reference catalogs into a TaskService.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_service import new_task_service

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        # Reads still work; the first save will report the problem.
        logger.warning("Could not create data directory %s", settings.data_dir, exc_info=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    service = new_task_service(
        settings.tasks_path,
        settings.status_path,
        settings.priority_path,
    )
    return AppState(settings=settings, service=service)
