# src/kill_task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The tracker depends on these instead of concrete implementations, so the
host integration and the progress backend stay swappable and tests can use
in-memory fakes.
"""

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Protocol

LogSink = Callable[[str], None]
# Receives user-visible lines ("Started task: ...", errors, /tasks rows).


class ProgressRepo(Protocol):
    """Per-character (name, count) snapshots of the active task set."""

    def path_for(self, character_name: str) -> Path: ...
    def load(self, path: str | Path) -> list[tuple[str, int]]: ...
    def save(self, path: str | Path, pairs: Iterable[tuple[str, int]]) -> None: ...
