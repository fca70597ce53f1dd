"""Typed dataclasses for the discipline data model.

All models use from_dict/to_dict for JSON/YAML serialization.
Unknown keys are ignored; missing or malformed keys use defaults.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


def _num(value: Any, default: float = 0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


# ── Profile ───────────────────────────────────────────────────


@dataclass
class Profile:
    timezone: str = "UTC"
    score_weight: int | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Profile:
        if not d or not isinstance(d, dict):
            return cls()
        weight = d.get("score_weight")
        return cls(
            timezone=str(d.get("timezone") or "UTC"),
            score_weight=_int(weight) if weight is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"timezone": self.timezone}
        if self.score_weight is not None:
            d["score_weight"] = self.score_weight
        return d


# ── Module records ────────────────────────────────────────────


@dataclass
class NoteItem:
    id: str = ""
    text: str = ""
    done: bool = False

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> NoteItem:
        return cls(
            id=str(d.get("id", "")),
            text=str(d.get("text", "")),
            done=bool(d.get("done", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "done": self.done}


@dataclass
class LiftSet:
    exercise: str = ""
    reps: int = 0
    kg: float = 0.0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LiftSet:
        return cls(
            exercise=str(d.get("exercise", "")),
            reps=max(0, _int(d.get("reps"))),
            kg=max(0.0, _num(d.get("kg"))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"exercise": self.exercise, "reps": self.reps, "kg": self.kg}

    def volume(self) -> float:
        return self.reps * self.kg


@dataclass
class FoodItem:
    name: str = ""
    kcal: float = 0.0
    protein: float = 0.0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FoodItem:
        return cls(
            name=str(d.get("name", "")),
            kcal=max(0.0, _num(d.get("kcal"))),
            protein=max(0.0, _num(d.get("protein"))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "kcal": self.kcal, "protein": self.protein}


@dataclass
class NutritionGoal:
    kcal: float = 2200
    protein: float = 140

    @classmethod
    def from_dict(cls, d: Any) -> NutritionGoal:
        if not isinstance(d, dict):
            return cls()
        return cls(
            kcal=max(0.0, _num(d.get("kcal"), 2200)),
            protein=max(0.0, _num(d.get("protein"), 140)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"kcal": self.kcal, "protein": self.protein}


# ── Dashboard ─────────────────────────────────────────────────


@dataclass
class ChartPoint:
    """One bar of a 7-day chart."""

    day: str
    label: str
    value: float
    pct: int

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day, "label": self.label, "value": self.value, "pct": self.pct}


@dataclass
class ModuleScore:
    name: str
    title: str
    done: bool
    weight: int

    @property
    def points(self) -> int:
        return self.weight if self.done else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "done": self.done,
            "weight": self.weight,
            "points": self.points,
        }


@dataclass
class ScoreCard:
    day: str
    modules: list[ModuleScore] = field(default_factory=list)

    @property
    def total(self) -> int:
        return min(100, sum(m.points for m in self.modules))

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "total": self.total,
            "modules": [m.to_dict() for m in self.modules],
        }
