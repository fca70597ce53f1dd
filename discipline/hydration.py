"""Hydration: daily water volume against a goal in mL."""

from __future__ import annotations

from typing import Any, Callable

from discipline.cell import Cell
from discipline.dailylog import DailyLog
from discipline.days import day_key, weekday_label
from discipline.habits import HabitModule, HabitTracker, as_number, clamp, percent
from discipline.models import ChartPoint
from discipline.store import KeyStore

GOAL_KEY = "hydr.goal"
LOG_KEY = "hydr.logs"
DEFAULT_GOAL_ML = 2500
QUICK_ADD_ML = [250, 330, 500, 750]
UNDO_ML = -250


def empty_record() -> dict[str, Any]:
    return {"ml": 0}


def record_ml(record: Any) -> float:
    if not isinstance(record, dict):
        return 0
    return as_number(record.get("ml"), 0)


def goal_met(goal: float, record: Any) -> bool:
    return record_ml(record) >= goal


def read_goal(store: KeyStore) -> float:
    return as_number(store.read(GOAL_KEY, DEFAULT_GOAL_ML), DEFAULT_GOAL_ML)


def is_done(store: KeyStore, day: str) -> bool:
    log = store.read(LOG_KEY, dict)
    record = log.get(day) if isinstance(log, dict) else None
    return goal_met(read_goal(store), record)


MODULE = HabitModule(
    name="hydration",
    title="Hydratation",
    prefix="hydr",
    keys=(GOAL_KEY, LOG_KEY),
    is_done=is_done,
)


class Hydration(HabitTracker):

    def __init__(self, store: KeyStore, today: Callable[[], str] = day_key) -> None:
        super().__init__(store, today)
        self.goal_cell = Cell(store, GOAL_KEY, DEFAULT_GOAL_ML)
        self.log = DailyLog(store, LOG_KEY, empty_record, today)

    @property
    def goal(self) -> float:
        return as_number(self.goal_cell.value, DEFAULT_GOAL_ML)

    def set_goal(self, ml: float) -> float:
        return self.goal_cell.set(clamp(as_number(ml, DEFAULT_GOAL_ML), 0))

    def ml(self, day: str | None = None) -> float:
        return record_ml(self.log.get(day or self.today_key()))

    def add(self, amount: float) -> float:
        """Add *amount* mL to today (negative to undo); never below zero."""
        amount = as_number(amount, 0)

        def update(record: dict[str, Any]) -> dict[str, Any]:
            record["ml"] = clamp(record_ml(record) + amount, 0)
            return record

        return self.log.upsert_today(update)["ml"]

    def progress(self) -> tuple[float, float, int]:
        """(ml today, goal, percent capped at 100)."""
        ml = self.ml()
        return ml, self.goal, percent(ml, self.goal)

    def done(self, day: str | None = None) -> bool:
        return goal_met(self.goal, self.log.get(day or self.today_key()))

    def history(self, days: int = 7) -> list[ChartPoint]:
        goal = self.goal
        return [
            ChartPoint(d, weekday_label(d), record_ml(r), percent(record_ml(r), goal))
            for d, r in self.log.window(days)
        ]
