# src/kill_task_tracker/tasks/errors.py

from __future__ import annotations


class KillTaskTrackerError(Exception):
    """Base class for all tracker errors."""


class CatalogLoadError(KillTaskTrackerError):
    """Task definitions could not be loaded. No partial catalog is produced."""


class DuplicateSubstringError(CatalogLoadError):
    def __init__(self, substring: str, first: str, second: str) -> None:
        super().__init__(
            f'Duplicate monster substring: "{substring}" (tasks "{first}" and "{second}").'
        )
        self.substring = substring
        self.first = first
        self.second = second


class ProgressLoadError(KillTaskTrackerError):
    """Progress snapshot exists but is unreadable or malformed."""


class ProgressSaveError(KillTaskTrackerError):
    """Progress snapshot could not be written."""
