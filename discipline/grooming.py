"""Grooming routine: a daily checklist of user-defined tasks."""

from __future__ import annotations

from typing import Any, Callable

from discipline.cell import Cell
from discipline.dailylog import DailyLog
from discipline.days import day_key
from discipline.habits import HabitModule, HabitTracker
from discipline.store import KeyStore

TASKS_KEY = "look.tasks"
DONE_KEY = "look.done"
DEFAULT_TASKS = [
    "Routine peau matin",
    "Routine peau soir",
    "Cheveux",
    "Fil dentaire",
    "Posture",
]


def default_tasks() -> list[str]:
    return list(DEFAULT_TASKS)


def read_tasks(store: KeyStore) -> list[str]:
    tasks = store.read(TASKS_KEY, default_tasks)
    return [str(t) for t in tasks] if isinstance(tasks, list) else default_tasks()


def any_checked(record: Any, tasks: list[str]) -> bool:
    """True if at least one current task is flagged for the day."""
    if not isinstance(record, dict):
        return False
    return any(record.get(task) is True for task in tasks)


def is_done(store: KeyStore, day: str) -> bool:
    log = store.read(DONE_KEY, dict)
    return any_checked(log.get(day) if isinstance(log, dict) else None, read_tasks(store))


MODULE = HabitModule(
    name="grooming",
    title="Lookmaxing",
    prefix="look",
    keys=(TASKS_KEY, DONE_KEY),
    is_done=is_done,
)


class Grooming(HabitTracker):

    def __init__(self, store: KeyStore, today: Callable[[], str] = day_key) -> None:
        super().__init__(store, today)
        self.tasks_cell = Cell(store, TASKS_KEY, default_tasks)
        self.log = DailyLog(store, DONE_KEY, dict, today)

    @property
    def tasks(self) -> list[str]:
        tasks = self.tasks_cell.value
        if not isinstance(tasks, list):
            return default_tasks()
        return [str(t) for t in tasks]

    def add_task(self, name: str) -> bool:
        name = (name or "").strip()
        if not name or name in self.tasks:
            return False
        self.tasks_cell.set(lambda prev: [*self.tasks, name])
        return True

    def remove_task(self, name: str) -> bool:
        """Drop *name* from the checklist; past days' flags are kept."""
        if name not in self.tasks:
            return False
        self.tasks_cell.set(lambda prev: [t for t in self.tasks if t != name])
        return True

    def checked(self, day: str | None = None) -> dict[str, bool]:
        record = self.log.get_or_empty(day or self.today_key())
        return {task: record.get(task) is True for task in self.tasks}

    def toggle(self, task: str) -> bool | None:
        """Flip today's flag for *task*. Returns the new flag, or None for unknown tasks."""
        if task not in self.tasks:
            return None
        record = self.log.upsert_today(lambda record: {**record, task: record.get(task) is not True})
        return record[task]

    def completion(self, day: str | None = None) -> tuple[int, int]:
        flags = self.checked(day)
        return sum(flags.values()), len(flags)

    def done(self, day: str | None = None) -> bool:
        return any_checked(self.log.get(day or self.today_key()), self.tasks)
