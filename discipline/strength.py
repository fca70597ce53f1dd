"""Strength training: sets logged per day, plus the rest-timer length."""

from __future__ import annotations

from typing import Any, Callable

from discipline.cell import Cell
from discipline.dailylog import DailyLog
from discipline.days import day_key, weekday_label
from discipline.habits import HabitModule, HabitTracker, as_number, clamp
from discipline.models import ChartPoint, LiftSet
from discipline.store import KeyStore

REST_KEY = "gym.rest"
LOG_KEY = "gym.log"
DEFAULT_REST_SECONDS = 90
MAX_REST_SECONDS = 15 * 60


def empty_record() -> dict[str, Any]:
    return {"sets": []}


def record_sets(record: Any) -> list[LiftSet]:
    if not isinstance(record, dict) or not isinstance(record.get("sets"), list):
        return []
    return [LiftSet.from_dict(s) for s in record["sets"] if isinstance(s, dict)]


def is_done(store: KeyStore, day: str) -> bool:
    log = store.read(LOG_KEY, dict)
    return len(record_sets(log.get(day) if isinstance(log, dict) else None)) > 0


MODULE = HabitModule(
    name="strength",
    title="Musculation",
    prefix="gym",
    keys=(REST_KEY, LOG_KEY),
    is_done=is_done,
)


class Strength(HabitTracker):

    def __init__(self, store: KeyStore, today: Callable[[], str] = day_key) -> None:
        super().__init__(store, today)
        self.rest_cell = Cell(store, REST_KEY, DEFAULT_REST_SECONDS)
        self.log = DailyLog(store, LOG_KEY, empty_record, today)

    @property
    def rest_seconds(self) -> int:
        return int(as_number(self.rest_cell.value, DEFAULT_REST_SECONDS))

    def set_rest(self, seconds: float) -> int:
        return self.rest_cell.set(int(clamp(as_number(seconds, DEFAULT_REST_SECONDS), 0, MAX_REST_SECONDS)))

    def sets(self, day: str | None = None) -> list[LiftSet]:
        return record_sets(self.log.get(day or self.today_key()))

    def add_set(self, exercise: str, reps: float, kg: float) -> LiftSet | None:
        exercise = (exercise or "").strip()
        if not exercise:
            return None
        lift = LiftSet(
            exercise=exercise,
            reps=int(clamp(as_number(reps, 0), 0)),
            kg=clamp(as_number(kg, 0), 0),
        )

        def update(record: dict[str, Any]) -> dict[str, Any]:
            record["sets"] = [s.to_dict() for s in record_sets(record)] + [lift.to_dict()]
            return record

        self.log.upsert_today(update)
        return lift

    def remove_set(self, index: int) -> bool:
        """Remove today's set at *index*; out-of-range indexes are ignored."""
        current = self.sets()
        if not 0 <= index < len(current):
            return False

        def update(record: dict[str, Any]) -> dict[str, Any]:
            record["sets"] = [s.to_dict() for i, s in enumerate(current) if i != index]
            return record

        self.log.upsert_today(update)
        return True

    def volume(self, day: str | None = None) -> float:
        """Total reps x kg for the day."""
        return sum(s.volume() for s in self.sets(day))

    def done(self, day: str | None = None) -> bool:
        return len(self.sets(day)) > 0

    def history(self, days: int = 7) -> list[ChartPoint]:
        points = [(d, sum(s.volume() for s in record_sets(r))) for d, r in self.log.window(days)]
        top = max((v for _, v in points), default=0)
        return [ChartPoint(d, weekday_label(d), v, round(v / top * 100) if top else 0) for d, v in points]
