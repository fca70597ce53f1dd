"""Sleep: hours slept per night against a goal."""

from __future__ import annotations

from typing import Any, Callable

from discipline.cell import Cell
from discipline.dailylog import DailyLog
from discipline.days import day_key, weekday_label
from discipline.habits import HabitModule, HabitTracker, as_number, clamp, percent
from discipline.models import ChartPoint
from discipline.store import KeyStore

GOAL_KEY = "sleep.goal"
LOG_KEY = "sleep.log"
DEFAULT_GOAL_HOURS = 8
MAX_HOURS = 24


def empty_record() -> dict[str, Any]:
    return {"h": 0}


def record_hours(record: Any) -> float:
    if not isinstance(record, dict):
        return 0
    return as_number(record.get("h"), 0)


def goal_met(goal: float, record: Any) -> bool:
    return record_hours(record) >= goal


def read_goal(store: KeyStore) -> float:
    return as_number(store.read(GOAL_KEY, DEFAULT_GOAL_HOURS), DEFAULT_GOAL_HOURS)


def is_done(store: KeyStore, day: str) -> bool:
    log = store.read(LOG_KEY, dict)
    record = log.get(day) if isinstance(log, dict) else None
    return goal_met(read_goal(store), record)


MODULE = HabitModule(
    name="sleep",
    title="Sommeil",
    prefix="sleep",
    keys=(GOAL_KEY, LOG_KEY),
    is_done=is_done,
)


class Sleep(HabitTracker):

    def __init__(self, store: KeyStore, today: Callable[[], str] = day_key) -> None:
        super().__init__(store, today)
        self.goal_cell = Cell(store, GOAL_KEY, DEFAULT_GOAL_HOURS)
        self.log = DailyLog(store, LOG_KEY, empty_record, today)

    @property
    def goal(self) -> float:
        return as_number(self.goal_cell.value, DEFAULT_GOAL_HOURS)

    def set_goal(self, hours: float) -> float:
        return self.goal_cell.set(clamp(as_number(hours, DEFAULT_GOAL_HOURS), 0, MAX_HOURS))

    def hours(self, day: str | None = None) -> float:
        return record_hours(self.log.get(day or self.today_key()))

    def log_hours(self, hours: float, day: str | None = None) -> float:
        """Set the hours slept for *day* (today by default), replacing any earlier value."""
        value = clamp(as_number(hours, 0), 0, MAX_HOURS)
        return self.log.upsert(day or self.today_key(), lambda record: {**record, "h": value})["h"]

    def done(self, day: str | None = None) -> bool:
        return goal_met(self.goal, self.log.get(day or self.today_key()))

    def history(self, days: int = 7) -> list[ChartPoint]:
        goal = self.goal
        return [
            ChartPoint(d, weekday_label(d), record_hours(r), percent(record_hours(r), goal))
            for d, r in self.log.window(days)
        ]
