"""Habit module capabilities and registry.

Each habit module registers a HabitModule: its key prefix, the keys it owns
and a read-only ``is_done(store, day)`` predicate. The dashboard scores days
through these capabilities only, so it never needs module internals or key
strings.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from discipline.cell import Cell
from discipline.dailylog import DailyLog
from discipline.days import day_key
from discipline.store import KeyStore, validate_key


def as_number(value: Any, default: float = 0) -> float:
    """Coerce a stored value to a finite number, falling back to *default*."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def clamp(value: float, low: float, high: float | None = None) -> float:
    value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


def percent(value: float, goal: float) -> int:
    """Progress of *value* towards *goal*, capped at 100."""
    return min(100, round(value / (goal or 1) * 100))


@dataclass(frozen=True)
class HabitModule:
    name: str
    title: str
    prefix: str
    keys: tuple[str, ...]
    is_done: Callable[[KeyStore, str], bool]
    scored: bool = True

    def __post_init__(self) -> None:
        for key in self.keys:
            validate_key(key)
            if not key.startswith(self.prefix + "."):
                raise ValueError(f"Key {key!r} is outside module prefix {self.prefix!r}")


class ModuleRegistry:
    """Ordered set of habit modules with unique names and key prefixes."""

    def __init__(self, modules: list[HabitModule] | None = None) -> None:
        self._modules: dict[str, HabitModule] = {}
        for module in modules or []:
            self.register(module)

    def register(self, module: HabitModule) -> HabitModule:
        if module.name in self._modules:
            raise ValueError(f"Module already registered: {module.name}")
        for other in self._modules.values():
            if other.prefix == module.prefix:
                raise ValueError(f"Key prefix {module.prefix!r} already used by {other.name}")
        self._modules[module.name] = module
        return module

    def __iter__(self) -> Iterator[HabitModule]:
        return iter(self._modules.values())


class HabitTracker:
    """Base for the stateful, view-facing side of a module (owns its cells)."""

    def __init__(self, store: KeyStore, today: Callable[[], str] = day_key) -> None:
        self.store = store
        self.today_key = today

    def cells(self) -> list[Cell]:
        """Every cell this tracker persists through, daily logs included."""
        found = []
        for attr in vars(self).values():
            if isinstance(attr, DailyLog):
                attr = attr.cell
            if isinstance(attr, Cell):
                found.append(attr)
        return found

    def done(self, day: str | None = None) -> bool:
        """Done predicate over this tracker's in-memory state."""
        raise NotImplementedError
