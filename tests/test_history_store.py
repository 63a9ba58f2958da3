import json
import threading
from pathlib import Path

import pytest

from summary_server.errors import StoreReadError, StoreWriteError
from summary_server.models import HistoryRecord
from summary_server.services import HistoryStore
from summary_server.services import history_store as history_store_module
from summary_server.utils import parse_iso_timestamp, utc_now


def _read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_ensure_valid_creates_missing_file(store, history_path):
    assert not history_path.exists()

    store.ensure_valid()

    assert _read_json(history_path) == []


def test_ensure_valid_is_idempotent_on_valid_store(store, history_path):
    store.append(HistoryRecord(text="a", summary="b"))
    before = history_path.read_bytes()

    store.ensure_valid()
    store.ensure_valid()

    assert history_path.read_bytes() == before


def test_append_orders_newest_first(store):
    store.append(HistoryRecord(text="first", summary="one"))
    store.append(HistoryRecord(text="second", summary="two"))

    records = store.read_all()

    assert [record.text for record in records] == ["second", "first"]


def test_append_stamps_timestamp_no_earlier_than_call(store):
    now = utc_now()
    # Stored timestamps carry millisecond precision.
    before = now.replace(microsecond=now.microsecond // 1000 * 1000)

    saved = store.append(HistoryRecord(text="hello", summary="hi", timestamp="ignored"))
    [loaded] = store.read_all()

    assert loaded.text == "hello"
    assert loaded.summary == "hi"
    assert loaded.timestamp == saved.timestamp
    assert loaded.timestamp.endswith("Z")
    assert parse_iso_timestamp(loaded.timestamp) >= before


def test_read_all_recreates_deleted_store(store, history_path):
    store.append(HistoryRecord(text="a", summary="b"))
    history_path.unlink()

    assert store.read_all() == []
    assert _read_json(history_path) == []


def test_append_discards_garbage_instead_of_merging(store, history_path):
    history_path.parent.mkdir(parents=True)
    history_path.write_text("{not json at all", encoding="utf-8")

    store.append(HistoryRecord(text="fresh", summary="start"))

    data = _read_json(history_path)
    assert len(data) == 1
    assert data[0]["text"] == "fresh"
    assert data[0]["summary"] == "start"


def test_corrupt_store_is_quarantined(store, history_path):
    history_path.parent.mkdir(parents=True)
    history_path.write_bytes(b"\xff\xfe garbage")

    assert store.read_all() == []

    quarantined = list(history_path.parent.glob("history.json.corrupt-*"))
    assert len(quarantined) == 1
    assert quarantined[0].read_bytes() == b"\xff\xfe garbage"


def test_quarantine_can_be_disabled(history_path):
    history_path.parent.mkdir(parents=True)
    history_path.write_text("nope", encoding="utf-8")
    store = HistoryStore(history_path, quarantine_corrupt=False)

    store.ensure_valid()

    assert _read_json(history_path) == []
    assert list(history_path.parent.glob("*.corrupt-*")) == []


@pytest.mark.parametrize("content", ["{}", '"text"', "42", "null", ""])
def test_non_array_documents_are_reset(store, history_path, content):
    history_path.parent.mkdir(parents=True)
    history_path.write_text(content, encoding="utf-8")

    assert store.read_all() == []
    assert _read_json(history_path) == []


def test_malformed_entries_are_skipped_on_read_but_kept_on_disk(store, history_path):
    history_path.parent.mkdir(parents=True)
    history_path.write_text(
        json.dumps([{"text": "ok", "summary": "fine", "timestamp": "2024-01-01T00:00:00.000Z"}, 7]),
        encoding="utf-8",
    )

    assert [record.text for record in store.read_all()] == ["ok"]

    store.append(HistoryRecord(text="new", summary="entry"))
    data = _read_json(history_path)
    assert data[0]["text"] == "new"
    assert data[2] == 7


def test_failed_write_leaves_prior_state_untouched(store, history_path, monkeypatch):
    store.append(HistoryRecord(text="kept", summary="safe"))
    before = history_path.read_bytes()

    def _fail_replace(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", _fail_replace)

    with pytest.raises(StoreWriteError):
        store.append(HistoryRecord(text="lost", summary="never"))

    monkeypatch.undo()
    assert history_path.read_bytes() == before
    assert not history_path.with_name("history.json.tmp").exists()


def test_unreadable_store_raises_read_and_write_errors(tmp_path):
    directory = tmp_path / "history.json"
    directory.mkdir()
    store = HistoryStore(directory)

    with pytest.raises(StoreReadError):
        store.read_all()
    with pytest.raises(StoreWriteError):
        store.append(HistoryRecord(text="a", summary="b"))


def test_concurrent_appends_are_serialized(store):
    workers = [
        threading.Thread(
            target=store.append, args=(HistoryRecord(text=f"text {i}", summary=f"summary {i}"),)
        )
        for i in range(20)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    records = store.read_all()
    assert sorted(record.text for record in records) == sorted(f"text {i}" for i in range(20))


def test_non_ascii_text_is_preserved(store, history_path):
    store.append(HistoryRecord(text="Résumé — 概要", summary="ok"))

    assert "Résumé — 概要" in history_path.read_text(encoding="utf-8")
    assert store.read_all()[0].text == "Résumé — 概要"


def test_quarantine_keeps_every_copy_within_the_same_instant(store, history_path, monkeypatch):
    frozen = utc_now()
    monkeypatch.setattr(history_store_module, "utc_now", lambda: frozen)
    history_path.parent.mkdir(parents=True)

    history_path.write_text("first garbage", encoding="utf-8")
    store.ensure_valid()
    history_path.write_text("second garbage", encoding="utf-8")
    store.ensure_valid()

    quarantined = sorted(history_path.parent.glob("history.json.corrupt-*"))
    assert len(quarantined) == 2
    assert {path.read_text(encoding="utf-8") for path in quarantined} == {
        "first garbage",
        "second garbage",
    }
