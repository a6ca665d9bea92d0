# src/kill_task_tracker/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .tracker import TaskTracker


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    tracker: TaskTracker

    # Single-writer guard: every engine call from a connector goes through it.
    lock: threading.RLock = field(default_factory=threading.RLock)
