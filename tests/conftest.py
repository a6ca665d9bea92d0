# tests/conftest.py

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from kill_task_tracker.core.state import AppState
from kill_task_tracker.core.tracker import TaskTracker
from kill_task_tracker.tasks.task_catalog import TaskCatalog

from .fakes import FakeProgressRepo, FakeSink

TASK_RECORDS = [
    {
        "name": "Mosswarts",
        "start_message": "Go kill some Mosswarts.",
        "monster_substrings": ["Mosswart"],
        "end_messages": ["Thanks for killing the Mosswarts.", "The swamp is safe again."],
        "num_kills": 10,
    },
    {
        "name": "Drudges",
        "start_message": "Go kill some Drudges.",
        "monster_substrings": ["Drudge"],
        "end_messages": ["Thanks for killing the Drudges."],
        "num_kills": 20,
    },
    {
        "name": "Rats",
        "start_message": "Hi",
        "monster_substrings": ["rat"],
        "end_messages": ["Bye rats"],
        "num_kills": 5,
    },
    {
        "name": "Bats",
        "start_message": "Hi",
        "monster_substrings": ["bat"],
        "end_messages": ["Bye bats"],
        "num_kills": 5,
    },
]


@pytest.fixture()
def records() -> list[dict]:
    return json.loads(json.dumps(TASK_RECORDS))


@pytest.fixture()
def catalog(records) -> TaskCatalog:
    return TaskCatalog.from_records(records)


@pytest.fixture()
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture()
def repo() -> FakeProgressRepo:
    return FakeProgressRepo()


@pytest.fixture()
def tracker(catalog, repo, sink) -> TaskTracker:
    """Tracker with a session already started for character "Tester"."""
    t = TaskTracker(catalog, repo, sink)
    t.session_ready("Tester")
    sink.lines.clear()
    return t


@pytest.fixture()
def settings(tmp_path: Path, records) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    definitions_path = tmp_path / "task_definitions.json"
    definitions_path.write_text(json.dumps(records), "utf-8")
    return SimpleNamespace(
        app_name="ktt-test",
        log_level="DEBUG",
        console_enabled=True,
        data_dir=tmp_path / "data",
        definitions_path=definitions_path,
        progress_dir=tmp_path / "progress",
        character_name="",
        persist_unmatched_kills=True,
    )


@pytest.fixture()
def state(settings, tracker) -> AppState:
    return AppState(settings=settings, tracker=tracker)
