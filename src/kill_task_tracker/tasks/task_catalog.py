# src/kill_task_tracker/tasks/task_catalog.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from .errors import CatalogLoadError, DuplicateSubstringError
from .task_models import TaskDefinition

logger = logging.getLogger(__name__)


class TaskCatalog:
    """
    Immutable set of task definitions plus lookup indices.

    Indices (built once, read-only afterwards):
    - start message   -> list of definitions (one tell may start several tasks)
    - monster substr  -> single definition
    - end message     -> single definition
    - name            -> single definition

    Any inconsistency aborts the whole load; there is no partial catalog.
    """

    def __init__(self, definitions: Iterable[TaskDefinition] = ()) -> None:
        self._by_name: dict[str, TaskDefinition] = {}
        self._by_start: dict[str, list[TaskDefinition]] = {}
        self._by_monster: dict[str, TaskDefinition] = {}
        self._by_end: dict[str, TaskDefinition] = {}

        for task in definitions:
            self._index(task)

    @classmethod
    def empty(cls) -> TaskCatalog:
        return cls()

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> TaskCatalog:
        definitions = [_record_to_definition(i, r) for i, r in enumerate(records)]
        return cls(definitions)

    @classmethod
    def load(cls, path: str | Path) -> TaskCatalog:
        """Load definitions from a JSON list of task records."""
        path = Path(path)
        try:
            raw = path.read_text("utf-8")
        except (OSError, ValueError) as e:
            raise CatalogLoadError(f"Cannot read task definitions {path}: {e}") from e

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise CatalogLoadError(f"Invalid JSON in task definitions {path}: {e}") from e

        if not isinstance(data, list):
            raise CatalogLoadError(f"Task definitions {path} must be a JSON list.")

        catalog = cls.from_records(data)
        logger.info("TaskCatalog ready path=%s tasks=%d", path, len(catalog))
        return catalog

    def _index(self, task: TaskDefinition) -> None:
        if task.name in self._by_name:
            raise CatalogLoadError(f'Duplicate task name: "{task.name}".')

        for substring in task.monster_substrings:
            owner = self._by_monster.get(substring)
            if owner is not None and owner.name != task.name:
                raise DuplicateSubstringError(substring, owner.name, task.name)
            self._by_monster[substring] = task

        for end_message in task.end_messages:
            owner = self._by_end.get(end_message)
            if owner is not None and owner.name != task.name:
                raise CatalogLoadError(
                    f'Duplicate end message: "{end_message}" '
                    f'(tasks "{owner.name}" and "{task.name}").'
                )
            self._by_end[end_message] = task

        self._by_start.setdefault(task.start_message, []).append(task)
        self._by_name[task.name] = task

    # ---- lookups ----

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[TaskDefinition]:
        return iter(self._by_name.values())

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> TaskDefinition | None:
        return self._by_name.get(name)

    def tasks_for_start(self, text: str) -> list[TaskDefinition]:
        return list(self._by_start.get(text, ()))

    def task_for_end(self, text: str) -> TaskDefinition | None:
        return self._by_end.get(text)

    def task_for_monster(self, monster_name: str) -> TaskDefinition | None:
        """
        Resolve a monster name captured from a kill broadcast.

        Exact key first; otherwise the longest registered substring contained
        in the name.
        """
        task = self._by_monster.get(monster_name)
        if task is not None:
            return task

        best: str | None = None
        for substring in self._by_monster:
            if substring and substring in monster_name:
                if best is None or len(substring) > len(best):
                    best = substring
        return self._by_monster[best] if best is not None else None


def _require_str(index: int, record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    if not isinstance(value, str):
        raise CatalogLoadError(f"Task record #{index}: '{key}' must be a string.")
    return value


def _require_str_list(index: int, record: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = record.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise CatalogLoadError(f"Task record #{index}: '{key}' must be a list of strings.")
    return tuple(value)


def _record_to_definition(index: int, record: Any) -> TaskDefinition:
    if not isinstance(record, Mapping):
        raise CatalogLoadError(f"Task record #{index} must be an object.")

    num_kills = record.get("num_kills")
    # bool is an int subclass; reject it explicitly
    if not isinstance(num_kills, int) or isinstance(num_kills, bool):
        raise CatalogLoadError(f"Task record #{index}: 'num_kills' must be an integer.")

    return TaskDefinition(
        name=_require_str(index, record, "name"),
        start_message=_require_str(index, record, "start_message"),
        monster_substrings=_require_str_list(index, record, "monster_substrings"),
        end_messages=_require_str_list(index, record, "end_messages"),
        num_kills=num_kills,
    )
