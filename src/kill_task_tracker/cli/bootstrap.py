# src/kill_task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- loads the task catalog (degrading to an empty one on failure),
- wires the progress store and log sink into a TaskTracker held by AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import LogSink
from ..core.state import AppState
from ..core.tracker import TaskTracker
from ..tasks.errors import CatalogLoadError
from ..tasks.progress_store import ProgressStore
from ..tasks.task_catalog import TaskCatalog

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.progress_dir.mkdir(parents=True, exist_ok=True)


def load_catalog(settings) -> tuple[TaskCatalog, str | None]:
    """
    Load task definitions. On failure return an empty catalog plus the error
    text, which the tracker reports once the session is ready.
    """
    try:
        return TaskCatalog.load(settings.definitions_path), None
    except CatalogLoadError as e:
        logger.error("Task catalog unavailable, running without tasks: %s", e)
        return TaskCatalog.empty(), str(e)


def create_initial_state(sink: LogSink, *, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    catalog, startup_error = load_catalog(settings)
    tracker = TaskTracker(
        catalog,
        ProgressStore(settings.progress_dir),
        sink,
        startup_error=startup_error,
        persist_unmatched_kills=settings.persist_unmatched_kills,
    )
    return AppState(settings=settings, tracker=tracker)
