"""Nutrition: food entries per day against calorie and protein targets.

Tracked for display only; it does not contribute to the daily score.
"""

from __future__ import annotations

from typing import Any, Callable

from discipline.cell import Cell
from discipline.dailylog import DailyLog
from discipline.days import day_key
from discipline.habits import HabitModule, HabitTracker, as_number, clamp
from discipline.models import FoodItem, NutritionGoal
from discipline.store import KeyStore

GOAL_KEY = "food.goal"
LOG_KEY = "food.log"


def empty_record() -> dict[str, Any]:
    return {"items": []}


def record_items(record: Any) -> list[FoodItem]:
    if not isinstance(record, dict) or not isinstance(record.get("items"), list):
        return []
    return [FoodItem.from_dict(i) for i in record["items"] if isinstance(i, dict)]


def totals_of(items: list[FoodItem]) -> dict[str, float]:
    return {
        "kcal": sum(i.kcal for i in items),
        "protein": sum(i.protein for i in items),
    }


def goal_met(goal: NutritionGoal, record: Any) -> bool:
    return totals_of(record_items(record))["protein"] >= goal.protein


def is_done(store: KeyStore, day: str) -> bool:
    log = store.read(LOG_KEY, dict)
    goal = NutritionGoal.from_dict(store.read(GOAL_KEY, dict))
    return goal_met(goal, log.get(day) if isinstance(log, dict) else None)


MODULE = HabitModule(
    name="nutrition",
    title="Nutrition",
    prefix="food",
    keys=(GOAL_KEY, LOG_KEY),
    is_done=is_done,
    scored=False,
)


class Nutrition(HabitTracker):

    def __init__(self, store: KeyStore, today: Callable[[], str] = day_key) -> None:
        super().__init__(store, today)
        self.goal_cell = Cell(store, GOAL_KEY, lambda: NutritionGoal().to_dict())
        self.log = DailyLog(store, LOG_KEY, empty_record, today)

    @property
    def goal(self) -> NutritionGoal:
        return NutritionGoal.from_dict(self.goal_cell.value)

    def set_goal(self, kcal: float | None = None, protein: float | None = None) -> NutritionGoal:
        current = self.goal
        goal = NutritionGoal(
            kcal=clamp(as_number(kcal, current.kcal), 0) if kcal is not None else current.kcal,
            protein=clamp(as_number(protein, current.protein), 0) if protein is not None else current.protein,
        )
        self.goal_cell.set(goal.to_dict())
        return goal

    def items(self, day: str | None = None) -> list[FoodItem]:
        return record_items(self.log.get(day or self.today_key()))

    def add_food(self, name: str, kcal: float, protein: float = 0) -> FoodItem | None:
        name = (name or "").strip()
        if not name:
            return None
        item = FoodItem(name=name, kcal=clamp(as_number(kcal, 0), 0), protein=clamp(as_number(protein, 0), 0))

        def update(record: dict[str, Any]) -> dict[str, Any]:
            record["items"] = [i.to_dict() for i in record_items(record)] + [item.to_dict()]
            return record

        self.log.upsert_today(update)
        return item

    def remove_food(self, index: int) -> bool:
        current = self.items()
        if not 0 <= index < len(current):
            return False

        def update(record: dict[str, Any]) -> dict[str, Any]:
            record["items"] = [it.to_dict() for i, it in enumerate(current) if i != index]
            return record

        self.log.upsert_today(update)
        return True

    def totals(self, day: str | None = None) -> dict[str, float]:
        return totals_of(self.items(day))

    def done(self, day: str | None = None) -> bool:
        return goal_met(self.goal, self.log.get(day or self.today_key()))
