"""Notes: free-form items grouped in user-defined categories."""

from __future__ import annotations

from typing import Any, Callable
from uuid import uuid4

from discipline.cell import Cell
from discipline.days import day_key
from discipline.habits import HabitModule, HabitTracker
from discipline.models import NoteItem
from discipline.store import KeyStore

CATS_KEY = "notes.cats"
ACTIVE_KEY = "notes.active"
ITEMS_KEY = "notes.items"
DEFAULT_CATEGORIES = ["À faire", "Idées"]


def default_categories() -> list[str]:
    return list(DEFAULT_CATEGORIES)


def has_items(items: Any) -> bool:
    """True if any category holds at least one item."""
    if not isinstance(items, dict):
        return False
    return any(isinstance(v, list) and len(v) > 0 for v in items.values())


def _matches(d: Any, item_id: str) -> bool:
    return isinstance(d, dict) and d.get("id") == item_id


def is_done(store: KeyStore, day: str) -> bool:
    # Notes are not day-keyed; presence of any item counts for every day.
    return has_items(store.read(ITEMS_KEY, dict))


MODULE = HabitModule(
    name="notes",
    title="Notes",
    prefix="notes",
    keys=(CATS_KEY, ACTIVE_KEY, ITEMS_KEY),
    is_done=is_done,
)


class Notes(HabitTracker):

    def __init__(self, store: KeyStore, today: Callable[[], str] = day_key) -> None:
        super().__init__(store, today)
        self.cats_cell = Cell(store, CATS_KEY, default_categories)
        self.active_cell = Cell(store, ACTIVE_KEY, lambda: self.categories[0] if self.categories else "")
        self.items_cell = Cell(store, ITEMS_KEY, dict)

    # ── Categories ──

    @property
    def categories(self) -> list[str]:
        cats = self.cats_cell.value
        if not isinstance(cats, list):
            return default_categories()
        return [str(c) for c in cats]

    @property
    def active(self) -> str:
        active = self.active_cell.value
        cats = self.categories
        if active in cats or not cats:
            return str(active or "")
        return cats[0]

    def add_category(self, name: str) -> bool:
        name = (name or "").strip()
        if not name or name in self.categories:
            return False
        self.cats_cell.set(lambda prev: [*self.categories, name])
        return True

    def set_active(self, name: str) -> bool:
        if name not in self.categories:
            return False
        self.active_cell.set(name)
        return True

    # ── Items ──

    def _all(self) -> dict[str, list[dict[str, Any]]]:
        items = self.items_cell.value
        return items if isinstance(items, dict) else {}

    def items(self, category: str | None = None) -> list[NoteItem]:
        raw = self._all().get(category or self.active, [])
        if not isinstance(raw, list):
            return []
        return [NoteItem.from_dict(d) for d in raw if isinstance(d, dict)]

    def add_item(self, text: str, category: str | None = None) -> NoteItem | None:
        """Append an item to *category* (the active one by default)."""
        text = (text or "").strip()
        category = category or self.active
        if not text or category not in self.categories:
            return None
        item = NoteItem(id=uuid4().hex, text=text, done=False)

        def update(prev: Any) -> dict[str, Any]:
            nxt = dict(prev) if isinstance(prev, dict) else {}
            existing = nxt.get(category)
            nxt[category] = [*(existing if isinstance(existing, list) else []), item.to_dict()]
            return nxt

        self.items_cell.set(update)
        return item

    def _map_item(self, item_id: str, fn: Callable[[list[dict[str, Any]]], list[dict[str, Any]]]) -> bool:
        for category, raw in self._all().items():
            if not isinstance(raw, list):
                continue
            if any(_matches(d, item_id) for d in raw):
                self.items_cell.set(lambda prev: {**prev, category: fn(raw)})
                return True
        return False

    def toggle_item(self, item_id: str) -> bool:
        def flip(raw: list[dict[str, Any]]) -> list[dict[str, Any]]:
            return [
                {**d, "done": not d.get("done", False)} if _matches(d, item_id) else d
                for d in raw
            ]

        return self._map_item(item_id, flip)

    def delete_item(self, item_id: str) -> bool:
        """Remove exactly the item with *item_id*; the rest keep their order."""
        return self._map_item(item_id, lambda raw: [d for d in raw if not _matches(d, item_id)])

    def done(self, day: str | None = None) -> bool:
        return has_items(self._all())
