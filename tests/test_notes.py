"""Tests for discipline/notes.py."""

from discipline import notes
from discipline.notes import Notes


def test_default_categories(mem_store, today):
    n = Notes(mem_store, today)
    assert n.categories == ["À faire", "Idées"]
    assert n.active == "À faire"
    assert n.items() == []
    assert n.done() is False


def test_adding_to_one_category_leaves_others(mem_store, today):
    n = Notes(mem_store, today)
    first = n.add_item("Appeler le dentiste")
    before = n.items("À faire")
    n.add_item("App de budget", category="Idées")
    assert n.items("À faire") == before == [first]
    assert [i.text for i in n.items("Idées")] == ["App de budget"]


def test_delete_removes_exactly_one_and_keeps_order(mem_store, today):
    n = Notes(mem_store, today)
    a = n.add_item("a")
    b = n.add_item("b")
    c = n.add_item("c")
    assert n.delete_item(b.id) is True
    assert [i.id for i in n.items()] == [a.id, c.id]
    assert n.delete_item("missing") is False
    assert [i.id for i in n.items()] == [a.id, c.id]


def test_toggle_item(mem_store, today):
    n = Notes(mem_store, today)
    item = n.add_item("Lire")
    assert n.toggle_item(item.id) is True
    assert n.items()[0].done is True
    n.toggle_item(item.id)
    assert n.items()[0].done is False


def test_blank_or_unknown_category_ignored(mem_store, today):
    n = Notes(mem_store, today)
    assert n.add_item("   ") is None
    assert n.add_item("x", category="Nope") is None
    assert mem_store.load(notes.ITEMS_KEY).status == "missing"


def test_categories_and_active(mem_store, today):
    n = Notes(mem_store, today)
    assert n.add_category(" Business ") is True
    assert n.add_category("Business") is False
    assert n.add_category("") is False
    assert n.set_active("Business") is True
    assert n.set_active("Unknown") is False
    n.add_item("Devis client")
    assert [i.text for i in n.items("Business")] == ["Devis client"]
    assert mem_store.read(notes.CATS_KEY, None) == ["À faire", "Idées", "Business"]
    assert mem_store.read(notes.ACTIVE_KEY, None) == "Business"


def test_stale_active_category_falls_back(mem_store, today):
    mem_store.write(notes.ACTIVE_KEY, "Deleted")
    assert Notes(mem_store, today).active == "À faire"


def test_done_is_presence_based(mem_store, today):
    n = Notes(mem_store, today)
    item = n.add_item("x", category="Idées")
    assert notes.is_done(mem_store, "2026-10-17") is True
    n.toggle_item(item.id)
    assert n.done() is True
    n.delete_item(item.id)
    assert notes.is_done(mem_store, "2026-10-17") is False
