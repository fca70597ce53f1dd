"""Per-module daily logs: DayKey -> record mappings, updated immutably."""

from __future__ import annotations

import copy
from typing import Any, Callable

from discipline.cell import Cell
from discipline.days import day_key, days_ending
from discipline.store import KeyStore

Record = Any
Log = dict[str, Record]


def get(log: Log, day: str) -> Record | None:
    """The record for *day*, or None."""
    if not isinstance(log, dict):
        return None
    return log.get(day)


def upsert(
    log: Log,
    day: str,
    updater: Callable[[Record], Record],
    empty: Callable[[], Record] = dict,
) -> Log:
    """Return a new log with only *day*'s record replaced by ``updater(existing)``.

    The updater gets a private copy of the existing record (or ``empty()``),
    so mutating it in place cannot leak into the old log.
    """
    existing = get(log, day)
    current = copy.deepcopy(existing) if existing is not None else empty()
    new_log = dict(log) if isinstance(log, dict) else {}
    new_log[day] = updater(current)
    return new_log


class DailyLog:
    """A daily log persisted under one store key through a Cell."""

    def __init__(
        self,
        store: KeyStore,
        key: str,
        empty: Callable[[], Record] = dict,
        today: Callable[[], str] = day_key,
    ) -> None:
        self.cell = Cell(store, key, dict)
        self.empty = empty
        self.today_key = today

    @property
    def key(self) -> str:
        return self.cell.key

    @property
    def data(self) -> Log:
        value = self.cell.value
        return value if isinstance(value, dict) else {}

    def get(self, day: str) -> Record | None:
        return get(self.data, day)

    def get_or_empty(self, day: str) -> Record:
        record = self.get(day)
        return record if isinstance(record, dict) else self.empty()

    def today(self) -> Record:
        return self.get_or_empty(self.today_key())

    def upsert(self, day: str, updater: Callable[[Record], Record]) -> Record:
        """Replace *day*'s record, persist, and return the new record."""
        def update(record: Record) -> Record:
            return updater(record if isinstance(record, dict) else self.empty())

        log = self.cell.set(lambda prev: upsert(prev, day, update, self.empty))
        return log[day]

    def upsert_today(self, updater: Callable[[Record], Record]) -> Record:
        return self.upsert(self.today_key(), updater)

    def window(self, days: int = 7) -> list[tuple[str, Record]]:
        """(day, record) pairs for the last *days* days, oldest first."""
        return [(d, self.get_or_empty(d)) for d in days_ending(self.today_key(), days)]
