"""Daily score: a stateless derivation over every module's persisted state.

Nothing here is cached or stored. Each call goes back to the store through
the modules' ``is_done`` capabilities, so a score always reflects what is
persisted right now, including goals changed after the day was logged.
"""

from __future__ import annotations

from typing import Iterable

from discipline import grooming, hydration, notes, nutrition, sleep, strength
from discipline.days import day_key, days_ending, weekday_label
from discipline.habits import HabitModule, ModuleRegistry
from discipline.models import ChartPoint, ModuleScore, ScoreCard
from discipline.store import KeyStore


def default_registry() -> ModuleRegistry:
    """All built-in modules, in tab order."""
    return ModuleRegistry(
        [
            hydration.MODULE,
            strength.MODULE,
            nutrition.MODULE,
            sleep.MODULE,
            grooming.MODULE,
            notes.MODULE,
        ]
    )


def module_weight(count: int, weight: int | None = None) -> int:
    """Points per scored module: *weight* if given, else 100 / count rounded."""
    if weight is not None:
        return max(0, int(weight))
    if count <= 0:
        return 0
    return round(100 / count)


def _scored(modules: Iterable[HabitModule] | None) -> list[HabitModule]:
    if modules is None:
        modules = default_registry()
    return [m for m in modules if m.scored]


def score_breakdown(
    store: KeyStore,
    modules: Iterable[HabitModule] | None = None,
    day: str | None = None,
    weight: int | None = None,
) -> ScoreCard:
    """Per-module done flags and points for *day* (today by default)."""
    if day is None:
        day = day_key()
    scored = _scored(modules)
    points = module_weight(len(scored), weight)
    return ScoreCard(
        day=day,
        modules=[ModuleScore(m.name, m.title, bool(m.is_done(store, day)), points) for m in scored],
    )


def compute_score(
    store: KeyStore,
    modules: Iterable[HabitModule] | None = None,
    day: str | None = None,
    weight: int | None = None,
) -> int:
    """Integer score in [0, 100] for *day*."""
    return score_breakdown(store, modules, day, weight).total


def score_history(
    store: KeyStore,
    days: int = 7,
    modules: Iterable[HabitModule] | None = None,
    today: str | None = None,
    weight: int | None = None,
) -> list[ChartPoint]:
    """Score for each of the last *days* days, oldest first."""
    scored = _scored(modules)
    out = []
    for d in days_ending(today or day_key(), days):
        total = compute_score(store, scored, d, weight)
        out.append(ChartPoint(d, weekday_label(d), total, total))
    return out
