"""Tests for discipline/store.py: JSON key store and its fallbacks."""

import json

import pytest

from discipline.store import (
    CORRUPT,
    FOUND,
    MISSING,
    UNAVAILABLE,
    FileBackend,
    KeyStore,
    MemoryBackend,
    open_store,
    validate_key,
)


@pytest.mark.parametrize(
    "value",
    [
        2500,
        8.5,
        "Dashboard",
        ["À faire", "Idées"],
        {"2026-10-17": {"ml": 750}, "2026-10-16": {"ml": 2500}},
        {"À faire": [{"id": "a1", "text": "Appeler", "done": False}]},
        None,
    ],
)
def test_write_then_read_round_trips(store, value):
    assert store.write("hydr.logs", value) is True
    assert store.read("hydr.logs", "default") == value


def test_missing_key_returns_default(mem_store):
    assert mem_store.read("hydr.goal", 2500) == 2500


def test_missing_key_calls_default_factory(mem_store):
    calls = []

    def factory():
        calls.append(1)
        return {}

    assert mem_store.read("hydr.logs", factory) == {}
    assert calls == [1]


def test_corrupt_value_returns_exact_default():
    store = KeyStore(MemoryBackend({"hydr.goal": "{not json"}))
    default = {"sentinel": True}
    assert store.read("hydr.goal", default) is default


def test_corrupt_file_returns_default(store, workspace):
    (workspace / "store" / "sleep.log.json").write_text("}}garbage", encoding="utf-8")
    assert store.read("sleep.log", dict) == {}


def test_load_distinguishes_missing_and_corrupt():
    store = KeyStore(MemoryBackend({"hydr.goal": "oops", "sleep.goal": "8"}))
    assert store.load("notes.items").status == MISSING
    assert store.load("hydr.goal").status == CORRUPT
    found = store.load("sleep.goal")
    assert found.status == FOUND
    assert found.ok
    assert found.value == 8


def test_unavailable_storage_reads_default_and_drops_writes():
    store = KeyStore(MemoryBackend(broken=True))
    assert store.load("hydr.goal").status == UNAVAILABLE
    assert store.read("hydr.goal", 2500) == 2500
    assert store.write("hydr.goal", 3000) is False
    assert store.keys() == []


def test_unserializable_value_is_not_written(mem_store):
    assert mem_store.write("hydr.goal", {1, 2}) is False
    assert mem_store.read("hydr.goal", 2500) == 2500


def test_file_backend_layout(store, workspace):
    store.write("look.tasks", ["Cheveux"])
    path = workspace / "store" / "look.tasks.json"
    assert json.loads(path.read_text(encoding="utf-8")) == ["Cheveux"]
    # No temp files left behind
    assert [p.name for p in (workspace / "store").iterdir()] == ["look.tasks.json"]


def test_file_backend_creates_directory(tmp_path):
    store = KeyStore(FileBackend(tmp_path / "nested" / "store"))
    assert store.write("app.tab", "Notes") is True
    assert store.read("app.tab", "Dashboard") == "Notes"


def test_keys_and_dump_filter_by_prefix(mem_store):
    mem_store.write("hydr.goal", 2000)
    mem_store.write("hydr.logs", {})
    mem_store.write("sleep.goal", 7)
    mem_store.backend.data["sleep.log"] = "broken"
    assert mem_store.keys("hydr.") == ["hydr.goal", "hydr.logs"]
    assert mem_store.dump() == {"hydr.goal": 2000, "hydr.logs": {}, "sleep.goal": 7}


@pytest.mark.parametrize("key", ["goal", "", "Hydr.goal", "hydr.", ".goal", "hydr goal"])
def test_invalid_keys_rejected(mem_store, key):
    with pytest.raises(ValueError, match="Invalid store key"):
        mem_store.read(key, None)


def test_validate_key_accepts_namespaced():
    assert validate_key("notes.items") == "notes.items"
    assert validate_key("app.tab") == "app.tab"


def test_open_store_uses_workspace(workspace):
    store = open_store()
    store.write("app.tab", "Sommeil")
    assert (workspace / "store" / "app.tab.json").exists()
