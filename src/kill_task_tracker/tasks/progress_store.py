# src/kill_task_tracker/tasks/progress_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .errors import ProgressLoadError, ProgressSaveError

logger = logging.getLogger(__name__)

ProgressPair = tuple[str, int]


class ProgressStore:
    """
    JSON progress snapshots, one file per character.

    File layout is a list of {"Key": name, "Value": count} objects (the format
    older tracker builds wrote). Plain [name, count] pairs are accepted on load.

    Every save fully overwrites the file with the current active set.
    """

    def __init__(self, progress_dir: str | Path = ".local/ktt") -> None:
        self._progress_dir = Path(progress_dir)

    def path_for(self, character_name: str) -> Path:
        return self._progress_dir / f"{character_name}.json"

    def load(self, path: str | Path) -> list[ProgressPair]:
        """Return saved (name, count) pairs. A missing file means no progress yet."""
        path = Path(path)
        if not path.exists():
            logger.debug("No progress file at %s", path)
            return []

        try:
            data = json.loads(path.read_text("utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            raise ProgressLoadError(f"Failed to read progress file {path}: {e}") from e

        if not isinstance(data, list):
            raise ProgressLoadError(f"Progress file {path} must contain a JSON list.")

        pairs = [_entry_to_pair(path, i, entry) for i, entry in enumerate(data)]
        logger.info("Loaded progress: %d tasks from %s", len(pairs), path)
        return pairs

    def save(self, path: str | Path, pairs: Iterable[ProgressPair]) -> None:
        path = Path(path)
        payload = [{"Key": name, "Value": int(count)} for name, count in pairs]
        tmp = path.with_suffix(".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload), "utf-8")
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise ProgressSaveError(f"Failed to save progress to {path}: {e}") from e
        logger.debug("Saved progress: %d tasks to %s", len(payload), path)


def _entry_to_pair(path: Path, index: int, entry: Any) -> ProgressPair:
    if isinstance(entry, dict):
        name, count = entry.get("Key"), entry.get("Value")
    elif isinstance(entry, list) and len(entry) == 2:
        name, count = entry
    else:
        raise ProgressLoadError(f"Progress file {path}: entry #{index} is malformed.")

    if not isinstance(name, str) or not isinstance(count, int) or isinstance(count, bool):
        raise ProgressLoadError(f"Progress file {path}: entry #{index} has wrong types.")
    return name, count
