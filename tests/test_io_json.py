import json
import logging

import numpy as np
import pytest

from msw_gpa.backend_logic import add_elective, remove_elective, set_row
from msw_gpa.catalog import CORE_ORDER, FIELD_ORDER
from msw_gpa.config import STATE_FILE_ENV, state_file_path
from msw_gpa.io_json import (
    JsonFileStore,
    MemoryStore,
    PersistenceAdapter,
    TABLE_COLUMNS,
    persist_rows,
    restore_rows,
    rows_to_frame,
)
from msw_gpa.models import Row
from msw_gpa.reconcile import initial_rows


class BrokenStore(PersistenceAdapter):
    def load(self):
        raise RuntimeError("disk on fire")

    def save(self, records):
        raise RuntimeError("disk on fire")

    def clear(self):
        pass


def _edited_rows():
    rows = add_elective(initial_rows())
    rows = set_row(rows, rows[0].key, grade="A-")
    el_key = [r for r in rows if r.kind == "elective"][0].key
    return set_row(rows, el_key, course_id="MANUAL", credit=2, grade="B")


def test_round_trip_through_file(tmp_path):
    store = JsonFileStore(tmp_path / "state" / "rows.json")
    rows = _edited_rows()
    persist_rows(store, rows)

    saved = json.loads((tmp_path / "state" / "rows.json").read_text(encoding="utf-8"))
    assert saved[0] == rows[0].to_record()
    assert set(saved[0]) == {"key", "kind", "courseId", "credit", "grade"}

    assert restore_rows(store) == rows


def test_missing_file_gives_defaults(tmp_path):
    store = JsonFileStore(tmp_path / "none.json")
    assert store.load() is None
    rows = restore_rows(store)
    assert [r.course_id for r in rows] == list(CORE_ORDER) + list(FIELD_ORDER)


@pytest.mark.parametrize("content", ["{not json", '{"rows": []}', "42", '"text"'])
def test_unusable_file_gives_defaults(tmp_path, content):
    path = tmp_path / "rows.json"
    path.write_text(content, encoding="utf-8")
    rows = restore_rows(JsonFileStore(path))
    assert len(rows) == len(CORE_ORDER) + len(FIELD_ORDER)
    assert all(r.grade == "" for r in rows)


def test_corrupt_file_is_logged(tmp_path, caplog):
    path = tmp_path / "rows.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="msw_gpa.io_json"):
        assert JsonFileStore(path).load() is None
    assert "Could not read saved rows" in caplog.text


def test_partial_legacy_file_is_reconciled(tmp_path):
    path = tmp_path / "rows.json"
    path.write_text(
        json.dumps([
            {"key": "x", "kind": "core", "courseId": "521", "credit": 3, "grade": "C"},
            {"key": "y", "kind": "elective", "courseId": "599", "credit": "3", "grade": "Z"},
            "garbage",
        ]),
        encoding="utf-8",
    )
    rows = restore_rows(JsonFileStore(path))
    by_key = {r.key: r for r in rows}
    assert by_key["x"] == Row("x", "core", "521", 3.0, "C")
    assert by_key["y"] == Row("y", "elective", "599", 3.0, "")
    assert len(rows) == len(CORE_ORDER) + 1 + len(FIELD_ORDER)


def test_save_failure_is_swallowed(tmp_path, caplog):
    # parent "directory" is a regular file, so the write fails
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileStore(blocker / "rows.json")
    with caplog.at_level(logging.WARNING, logger="msw_gpa.io_json"):
        persist_rows(store, initial_rows())
    assert "Could not save rows" in caplog.text


def test_clear(tmp_path):
    store = JsonFileStore(tmp_path / "rows.json")
    persist_rows(store, initial_rows())
    store.clear()
    assert store.load() is None
    store.clear()


def test_broken_adapter_never_raises():
    rows = restore_rows(BrokenStore())
    assert len(rows) == len(CORE_ORDER) + len(FIELD_ORDER)
    persist_rows(BrokenStore(), rows)


def test_memory_store_round_trip():
    store = MemoryStore()
    assert len(restore_rows(store)) == len(CORE_ORDER) + len(FIELD_ORDER)
    rows = _edited_rows()
    persist_rows(store, rows)
    assert restore_rows(store) == rows
    store.clear()
    assert store.load() is None


def test_memory_store_bad_json():
    assert MemoryStore("[{").load() is None


def test_state_file_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv(STATE_FILE_ENV, str(tmp_path / "custom.json"))
    assert state_file_path() == tmp_path / "custom.json"
    assert JsonFileStore().path == tmp_path / "custom.json"


def test_rows_to_frame():
    rows = (
        Row("c", "core", "500", 3, "B+"),
        Row("e", "elective", "MANUAL", 2, ""),
        Row("f", "field", "550", 3, "S"),
    )
    df = rows_to_frame(rows)
    assert list(df.columns) == TABLE_COLUMNS
    assert list(df["Course"]) == ["SW 500 Social Welfare History", "Manual elective entry", "SW 550 Field Instruction I"]
    assert df.loc[0, "Points"] == pytest.approx(9.99)
    assert np.isnan(df.loc[1, "Grade value"])
    assert np.isnan(df.loc[2, "Points"])


def test_rows_to_frame_empty():
    df = rows_to_frame(())
    assert df.empty
    assert list(df.columns) == TABLE_COLUMNS


def test_duplicate_saved_keys_are_made_unique():
    store = MemoryStore(json.dumps([
        {"key": "x", "kind": "elective", "courseId": "522", "credit": 3, "grade": "A"},
        {"key": "x", "kind": "elective", "courseId": "523", "credit": 3, "grade": "B"},
        {"key": "x", "kind": "core", "courseId": "500", "credit": 3, "grade": "C"},
    ]))
    rows = restore_rows(store)
    keys = [r.key for r in rows]
    assert len(set(keys)) == len(keys)

    electives = [r for r in rows if r.kind == "elective"]
    assert [r.course_id for r in electives] == ["522", "523"]
    assert electives[0].key == "x"

    after = remove_elective(rows, "x")
    assert [r.course_id for r in after if r.kind == "elective"] == ["523"]
