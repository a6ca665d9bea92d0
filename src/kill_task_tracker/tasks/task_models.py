# src/kill_task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ChannelKind(StrEnum):
    """
    Chat channel a line arrived on.

    Notes:
    - the host chat system tags lines with a color code; 3 is a private tell,
      0 is broadcast/system text. Everything else is ignored by the engine.
    """

    TELL = "tell"
    BROADCAST = "broadcast"
    OTHER = "other"

    @classmethod
    def from_color(cls, color: int | None) -> ChannelKind:
        if color == 3:
            return cls.TELL
        if color == 0:
            return cls.BROADCAST
        return cls.OTHER


@dataclass(frozen=True, slots=True)
class TaskDefinition:
    name: str
    start_message: str
    monster_substrings: tuple[str, ...]
    end_messages: tuple[str, ...]
    num_kills: int


@dataclass(slots=True)
class TaskProgress:
    in_progress: bool = False
    count: int = 0  # only meaningful while in_progress

    def start(self, count: int = 0) -> None:
        self.in_progress = True
        self.count = count

    def reset(self) -> None:
        self.in_progress = False
        self.count = 0


@dataclass(frozen=True, slots=True)
class ActiveTask:
    """Row of the /tasks listing."""

    name: str
    count: int
    num_kills: int

    def describe(self) -> str:
        return f"{self.name} - {self.count} of {self.num_kills}."
