from datetime import datetime, timedelta, timezone

import pytest

from codeinsights.analyzer import analyze
from codeinsights.history import HistoryError, HistoryStore


def _at(hour: int) -> datetime:
    return datetime(2024, 5, 1, hour, 0, 0, tzinfo=timezone.utc)


def test_append_and_read_back(tmp_path):
    store = HistoryStore(str(tmp_path / "h.jsonl"))
    rec = store.append("alice", analyze("int x = 1;"), timestamp=_at(9))
    assert rec.user_id == "alice"
    assert rec.timestamp == "2024-05-01T09:00:00+00:00"

    [loaded] = store.for_user("alice")
    assert loaded.language == "c"
    assert loaded.source_code == "int x = 1;"
    assert loaded.data["symbolTable"]["x"]["type"] == "int"
    assert loaded.to_dict()["userId"] == "alice"


def test_for_user_newest_first(tmp_path):
    store = HistoryStore(str(tmp_path / "h.jsonl"))
    store.append("alice", analyze("a = 1;"), timestamp=_at(8))
    store.append("bob", analyze("b = 2;"), timestamp=_at(9))
    store.append("alice", analyze("c = 3;"), timestamp=_at(10))

    assert [r.source_code for r in store.for_user("alice")] == ["c = 3;", "a = 1;"]
    assert [r.source_code for r in store.for_user("bob")] == ["b = 2;"]
    assert store.for_user("carol") == []


def test_missing_file_is_empty(tmp_path):
    assert HistoryStore(str(tmp_path / "none.jsonl")).records() == []


def test_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "h.jsonl"
    HistoryStore(str(path)).append("u", analyze("x = 1;"))
    assert path.exists()


def test_failed_analysis_not_recorded(tmp_path):
    store = HistoryStore(str(tmp_path / "h.jsonl"))
    with pytest.raises(HistoryError):
        store.append("u", analyze('"oops'))


def test_corrupt_line(tmp_path):
    path = tmp_path / "h.jsonl"
    path.write_text('{"userId": "u", "timestamp": "t"}\nnot json\n')
    with pytest.raises(HistoryError) as exc:
        HistoryStore(str(path)).records()
    assert ":2:" in str(exc.value)


def test_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.jsonl"
    monkeypatch.setenv("CODEINSIGHTS_HISTORY", str(path))
    HistoryStore().append("u", analyze("x = 1;"))
    assert path.exists()


def test_timestamps_normalized_to_utc(tmp_path):
    store = HistoryStore(str(tmp_path / "h.jsonl"))
    plus_five = timezone(timedelta(hours=5))
    rec = store.append("alice", analyze("old = 1;"), timestamp=datetime(2024, 5, 1, 12, 0, tzinfo=plus_five))
    store.append("alice", analyze("new = 2;"), timestamp=_at(10))

    assert rec.timestamp == "2024-05-01T07:00:00+00:00"
    assert [r.source_code for r in store.for_user("alice")] == ["new = 2;", "old = 1;"]


def test_naive_timestamp_taken_as_utc(tmp_path):
    store = HistoryStore(str(tmp_path / "h.jsonl"))
    rec = store.append("u", analyze("x = 1;"), timestamp=datetime(2024, 5, 1, 9, 30))
    assert rec.timestamp == "2024-05-01T09:30:00+00:00"
