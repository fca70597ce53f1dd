"""Tests for discipline/cell.py: in-memory value mirrored to the store."""

from discipline.cell import Cell, create_cell
from discipline.store import KeyStore, MemoryBackend


def test_initial_value_reflects_storage(mem_store):
    mem_store.write("hydr.goal", 3000)
    cell = Cell(mem_store, "hydr.goal", 2500)
    assert cell.value == 3000


def test_initial_value_uses_default_when_absent(mem_store):
    cell = Cell(mem_store, "notes.cats", lambda: ["À faire"])
    assert cell.value == ["À faire"]
    # Reading alone does not persist the default
    assert mem_store.load("notes.cats").status == "missing"


def test_set_value_persists_before_returning(mem_store):
    cell = Cell(mem_store, "hydr.goal", 2500)
    assert cell.set(2000) == 2000
    assert cell.value == 2000
    assert mem_store.read("hydr.goal", None) == 2000


def test_set_function_of_previous(mem_store):
    cell = Cell(mem_store, "sleep.goal", 8)
    cell.set(lambda prev: prev + 1)
    cell.set(lambda prev: prev + 1)
    assert cell.value == 10
    assert mem_store.read("sleep.goal", None) == 10


def test_memory_stays_authoritative_when_write_fails():
    backend = MemoryBackend()
    store = KeyStore(backend)
    cell = Cell(store, "hydr.goal", 2500)
    backend.broken = True
    cell.set(1800)
    assert cell.value == 1800


def test_subscribers_notified_after_persist(mem_store):
    cell = Cell(mem_store, "app.tab", "Dashboard")
    seen = []
    unsubscribe = cell.subscribe(lambda v: seen.append((v, mem_store.read("app.tab", None))))
    cell.set("Notes")
    unsubscribe()
    cell.set("Sommeil")
    assert seen == [("Notes", "Notes")]


def test_create_cell_tuple(mem_store):
    value, mutate = create_cell(mem_store, "hydr.goal", 2500)
    assert value == 2500
    assert mutate(lambda prev: prev - 500) == 2000
    assert mem_store.read("hydr.goal", None) == 2000


def test_cells_on_same_key_are_independent(mem_store):
    a = Cell(mem_store, "hydr.goal", 2500)
    b = Cell(mem_store, "hydr.goal", 2500)
    a.set(1000)
    assert b.value == 2500
