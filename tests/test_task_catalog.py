# tests/test_task_catalog.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from kill_task_tracker.tasks.errors import CatalogLoadError, DuplicateSubstringError
from kill_task_tracker.tasks.task_catalog import TaskCatalog


def test_every_substring_resolves_to_its_owner(catalog, records) -> None:
    assert len(catalog) == len(records)
    for record in records:
        for substring in record["monster_substrings"]:
            task = catalog.task_for_monster(substring)
            assert task is not None
            assert task.name == record["name"]


def test_shared_start_message_maps_to_all_tasks(catalog) -> None:
    names = [t.name for t in catalog.tasks_for_start("Hi")]
    assert names == ["Rats", "Bats"]
    assert catalog.tasks_for_start("hi") == []
    assert catalog.tasks_for_start("Hi ") == []


def test_end_messages_map_to_single_task(catalog) -> None:
    assert catalog.task_for_end("The swamp is safe again.").name == "Mosswarts"
    assert catalog.task_for_end("Thanks for killing the Mosswarts.").name == "Mosswarts"
    assert catalog.task_for_end("Thanks for killing the Mosswarts") is None


def test_monster_lookup_uses_substring_containment(records) -> None:
    records.append(
        {
            "name": "Giant Rats",
            "start_message": "Big ones",
            "monster_substrings": ["Giant rat"],
            "end_messages": ["Big ones done"],
            "num_kills": 3,
        }
    )
    catalog = TaskCatalog.from_records(records)

    assert catalog.task_for_monster("Mosswart Elder").name == "Mosswarts"
    # longest contained substring wins
    assert catalog.task_for_monster("Giant rats").name == "Giant Rats"
    assert catalog.task_for_monster("rats").name == "Rats"
    assert catalog.task_for_monster("Olthoi") is None


def test_duplicate_substring_fails_whole_load(records) -> None:
    records[1]["monster_substrings"].append("Mosswart")
    with pytest.raises(DuplicateSubstringError) as exc:
        TaskCatalog.from_records(records)
    assert isinstance(exc.value, CatalogLoadError)
    assert exc.value.substring == "Mosswart"
    assert "Mosswart" in str(exc.value)


def test_duplicate_name_and_cross_task_end_message_fail(records) -> None:
    dup_name = [dict(records[0]), dict(records[0], monster_substrings=["Other"], end_messages=[])]
    with pytest.raises(CatalogLoadError, match="Duplicate task name"):
        TaskCatalog.from_records(dup_name)

    records[1]["end_messages"] = ["The swamp is safe again."]
    with pytest.raises(CatalogLoadError, match="Duplicate end message"):
        TaskCatalog.from_records(records)


@pytest.mark.parametrize(
    "field, value",
    [
        ("name", None),
        ("start_message", 5),
        ("monster_substrings", "Mosswart"),
        ("end_messages", [1, 2]),
        ("num_kills", "10"),
        ("num_kills", True),
    ],
)
def test_malformed_record_is_rejected(records, field, value) -> None:
    records[0][field] = value
    with pytest.raises(CatalogLoadError):
        TaskCatalog.from_records(records)


def test_load_from_file(tmp_path: Path, records) -> None:
    path = tmp_path / "task_definitions.json"
    path.write_text(json.dumps(records), "utf-8")

    catalog = TaskCatalog.load(path)

    assert [t.name for t in catalog] == [r["name"] for r in records]
    assert catalog.get("Drudges").num_kills == 20
    assert catalog.get("Drudges").monster_substrings == ("Drudge",)


def test_load_failures_are_catalog_errors(tmp_path: Path) -> None:
    with pytest.raises(CatalogLoadError):
        TaskCatalog.load(tmp_path / "missing.json")

    bad_json = tmp_path / "bad.json"
    bad_json.write_text("[{", "utf-8")
    with pytest.raises(CatalogLoadError):
        TaskCatalog.load(bad_json)

    not_a_list = tmp_path / "obj.json"
    not_a_list.write_text('{"name": "x"}', "utf-8")
    with pytest.raises(CatalogLoadError):
        TaskCatalog.load(not_a_list)


def test_example_definitions_file_loads() -> None:
    path = Path(__file__).resolve().parent.parent / "task_definitions.example.json"
    catalog = TaskCatalog.load(path)
    assert catalog.task_for_monster("Drudge Skulker").name == "Drudge Cleansing"


def test_undecodable_or_too_deep_file_is_catalog_error(tmp_path: Path) -> None:
    not_utf8 = tmp_path / "latin.json"
    not_utf8.write_bytes(b'[{"name": "\xff\xfe"}]')
    with pytest.raises(CatalogLoadError, match="Cannot read task definitions"):
        TaskCatalog.load(not_utf8)

    too_deep = tmp_path / "deep.json"
    too_deep.write_text("[" * 100_000 + "]" * 100_000, "utf-8")
    with pytest.raises(CatalogLoadError):
        TaskCatalog.load(too_deep)
