"""Reactive state cell: one store key mirrored in memory, persisted on every change."""

from __future__ import annotations

import logging
from typing import Any, Callable

from discipline.store import KeyStore

logger = logging.getLogger(__name__)


class Cell:
    """In-memory value bound to a single store key.

    The value is loaded synchronously at construction, so the first read
    already reflects storage. ``set`` persists before returning. Only one
    cell per key should be live at a time; cells on the same key do not see
    each other's writes.
    """

    def __init__(self, store: KeyStore, key: str, default: Any | Callable[[], Any]) -> None:
        self.store = store
        self.key = key
        self._value = store.read(key, default)
        self._subscribers: list[Callable[[Any], None]] = []

    def __repr__(self) -> str:
        return f"Cell({self.key!r}, {self._value!r})"

    @property
    def value(self) -> Any:
        return self._value

    def set(self, update: Any | Callable[[Any], Any]) -> Any:
        """Replace the value (or apply a function of the previous one) and persist it."""
        new = update(self._value) if callable(update) else update
        self._value = new
        if not self.store.write(self.key, new):
            logger.info("Cell %s kept in memory only", self.key)
        for callback in list(self._subscribers):
            callback(new)
        return new

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Call *callback* with the new value after each ``set``. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe


def create_cell(store: KeyStore, key: str, default: Any) -> tuple[Any, Callable[[Any], Any]]:
    """Tuple form of a cell: (current value, mutate)."""
    cell = Cell(store, key, default)
    return cell.value, cell.set
