# tests/fakes.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from kill_task_tracker.tasks.errors import ProgressLoadError, ProgressSaveError


@dataclass(slots=True)
class FakeSink:
    """Collects everything the tracker emits."""

    lines: list[str] = field(default_factory=list)

    def __call__(self, line: str) -> None:
        self.lines.append(line)


class FakeProgressRepo:
    """
    In-memory ProgressRepo used for tracker unit tests.

    Keeps snapshots per path and records every save, so tests can assert
    on persistence calls without touching the filesystem.
    """

    def __init__(self, saved: dict[str, list[tuple[str, int]]] | None = None) -> None:
        self.files: dict[str, list[tuple[str, int]]] = dict(saved or {})
        self.saves: list[list[tuple[str, int]]] = []
        self.fail_load = False
        self.fail_save = False

    def path_for(self, character_name: str) -> Path:
        return Path(f"{character_name}.json")

    def load(self, path: str | Path) -> list[tuple[str, int]]:
        if self.fail_load:
            raise ProgressLoadError(f"Failed to read progress file {path}: broken")
        return list(self.files.get(str(path), []))

    def save(self, path: str | Path, pairs: Iterable[tuple[str, int]]) -> None:
        if self.fail_save:
            raise ProgressSaveError(f"Failed to save progress to {path}: disk full")
        snapshot = list(pairs)
        self.files[str(path)] = snapshot
        self.saves.append(snapshot)
