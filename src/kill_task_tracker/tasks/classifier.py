# src/kill_task_tracker/tasks/classifier.py

"""
Chat line classification.

`classify()` is a pure decision function: it looks a line up in the catalog
and returns the transitions it implies, in the order they must be applied.
It never reads or mutates progress. Whether a `start` is a no-op, or a
`kill_count` is an implicit start or a plain update, is decided by whoever
applies the transitions against live progress (see core/tracker.py).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from .task_catalog import TaskCatalog
from .task_models import ChannelKind

KILL_REGEX = re.compile(
    r"You have killed ([1-9][0-9]*) ([A-Za-z ]+)! "
    r"(?:You must kill [0-9]+ to complete your task\.|Your task is complete!)"
)


class TransitionKind(StrEnum):
    START = "start"
    FINISH = "finish"
    KILL_COUNT = "kill_count"


@dataclass(frozen=True, slots=True)
class Transition:
    kind: TransitionKind
    task_name: str
    count: int = 0


@dataclass(frozen=True, slots=True)
class Classification:
    transitions: tuple[Transition, ...] = ()
    # Write progress even if applying the transitions changes nothing.
    persist: bool = False


NO_MATCH = Classification()


@dataclass(frozen=True, slots=True)
class KillReport:
    count: int
    monster_name: str


def parse_kill_message(text: str) -> KillReport | None:
    m = KILL_REGEX.search(text)
    if not m:
        return None
    return KillReport(count=int(m.group(1)), monster_name=m.group(2))


def classify(
    catalog: TaskCatalog,
    channel: ChannelKind,
    text: str,
    *,
    persist_unmatched_kills: bool = True,
) -> Classification:
    if channel == ChannelKind.TELL:
        return _classify_tell(catalog, text)
    if channel == ChannelKind.BROADCAST:
        return _classify_broadcast(catalog, text, persist_unmatched_kills)
    return NO_MATCH


def _classify_tell(catalog: TaskCatalog, text: str) -> Classification:
    # Start and end are checked independently; a text may be both.
    transitions = [Transition(TransitionKind.START, t.name) for t in catalog.tasks_for_start(text)]

    ended = catalog.task_for_end(text)
    if ended is not None:
        transitions.append(Transition(TransitionKind.FINISH, ended.name))

    if not transitions:
        return NO_MATCH
    return Classification(transitions=tuple(transitions))


def _classify_broadcast(
    catalog: TaskCatalog, text: str, persist_unmatched_kills: bool
) -> Classification:
    report = parse_kill_message(text)
    if report is None:
        return NO_MATCH

    task = catalog.task_for_monster(report.monster_name)
    if task is None:
        return Classification(persist=persist_unmatched_kills)

    return Classification(
        transitions=(Transition(TransitionKind.KILL_COUNT, task.name, report.count),),
        persist=True,
    )
