"""Selected view, persisted so the app reopens where it was left."""

from __future__ import annotations

from discipline.cell import Cell
from discipline.store import KeyStore

TAB_KEY = "app.tab"
DASHBOARD = "Dashboard"
TABS = [DASHBOARD, "Hydratation", "Musculation", "Nutrition", "Sommeil", "Lookmaxing", "Notes"]


class TabState:
    def __init__(self, store: KeyStore) -> None:
        self.cell = Cell(store, TAB_KEY, DASHBOARD)

    @property
    def current(self) -> str:
        tab = self.cell.value
        return tab if tab in TABS else DASHBOARD

    def select(self, tab: str) -> str:
        if tab not in TABS:
            tab = DASHBOARD
        return self.cell.set(tab)
