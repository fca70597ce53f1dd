"""Tests for discipline/tabs.py."""

from discipline.tabs import DASHBOARD, TAB_KEY, TabState


def test_default_tab(mem_store):
    assert TabState(mem_store).current == DASHBOARD


def test_select_persists(mem_store):
    TabState(mem_store).select("Sommeil")
    assert mem_store.read(TAB_KEY, None) == "Sommeil"
    assert TabState(mem_store).current == "Sommeil"


def test_unknown_tab_falls_back(mem_store):
    mem_store.write(TAB_KEY, "Business")
    assert TabState(mem_store).current == DASHBOARD
    assert TabState(mem_store).select("Nope") == DASHBOARD
