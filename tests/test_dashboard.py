"""Tests for discipline/dashboard.py: daily score aggregation."""

import pytest

from discipline import grooming, hydration, notes, sleep, strength
from discipline.dashboard import (
    compute_score,
    default_registry,
    module_weight,
    score_breakdown,
    score_history,
)
from discipline.grooming import Grooming
from discipline.habits import HabitModule, ModuleRegistry
from discipline.hydration import Hydration
from discipline.notes import Notes
from discipline.sleep import Sleep
from discipline.strength import Strength

DAY = "2026-10-17"
FOUR = [hydration.MODULE, sleep.MODULE, notes.MODULE, grooming.MODULE]


def _meet_hydration_and_sleep(store, today):
    Hydration(store, today).add(2500)
    Sleep(store, today).log_hours(8)


def test_empty_store_scores_zero(mem_store):
    assert compute_score(mem_store, day=DAY) == 0


def test_four_modules_weight_twenty(mem_store, today):
    _meet_hydration_and_sleep(mem_store, today)
    assert compute_score(mem_store, FOUR, DAY, weight=20) == 40


def test_default_registry_gives_twenty_per_module(mem_store, today):
    _meet_hydration_and_sleep(mem_store, today)
    card = score_breakdown(mem_store, day=DAY)
    assert [m.name for m in card.modules] == ["hydration", "strength", "sleep", "grooming", "notes"]
    assert {m.weight for m in card.modules} == {20}
    assert card.total == 40
    assert compute_score(mem_store, day=DAY) == 40


def test_everything_done_scores_hundred(mem_store, today):
    _meet_hydration_and_sleep(mem_store, today)
    Notes(mem_store, today).add_item("x")
    Grooming(mem_store, today).toggle("Cheveux")
    Strength(mem_store, today).add_set("Squat", 5, 100)
    assert compute_score(mem_store, day=DAY) == 100


def test_score_reads_store_not_trackers(mem_store, today):
    h = Hydration(mem_store, today)
    assert compute_score(mem_store, FOUR, DAY) == 0
    h.add(2500)
    # No caching: the next query sees the new write
    assert compute_score(mem_store, FOUR, DAY) == 25


def test_goal_change_rescores_past_days(mem_store):
    mem_store.write(hydration.LOG_KEY, {"2026-10-16": {"ml": 2000}})
    assert compute_score(mem_store, FOUR, "2026-10-16", weight=20) == 0
    mem_store.write(hydration.GOAL_KEY, 2000)
    assert compute_score(mem_store, FOUR, "2026-10-16", weight=20) == 20


def test_corrupt_storage_scores_as_not_done(mem_store):
    for key in (hydration.LOG_KEY, sleep.LOG_KEY, notes.ITEMS_KEY, grooming.DONE_KEY, strength.LOG_KEY):
        mem_store.backend.data[key] = "{corrupt"
    assert compute_score(mem_store, day=DAY) == 0


def test_breakdown_points(mem_store, today):
    Sleep(mem_store, today).log_hours(9)
    card = score_breakdown(mem_store, FOUR, DAY)
    by_name = {m.name: m for m in card.modules}
    assert by_name["sleep"].points == 25
    assert by_name["hydration"].points == 0
    assert card.to_dict()["total"] == 25


@pytest.mark.parametrize("count,expected", [(4, 25), (5, 20), (3, 33), (6, 17), (0, 0)])
def test_module_weight_rounds_per_module(count, expected):
    assert module_weight(count) == expected


def test_uneven_weights_do_not_reach_hundred(mem_store, today):
    _meet_hydration_and_sleep(mem_store, today)
    Notes(mem_store, today).add_item("x")
    assert compute_score(mem_store, FOUR[:3], DAY) == 99


def test_total_is_capped(mem_store, today):
    _meet_hydration_and_sleep(mem_store, today)
    assert compute_score(mem_store, FOUR, DAY, weight=80) == 100


def test_score_history(mem_store):
    mem_store.write(sleep.LOG_KEY, {"2026-10-15": {"h": 8}, "2026-10-17": {"h": 9}})
    points = score_history(mem_store, days=3, today=DAY)
    assert [(p.day, p.value) for p in points] == [
        ("2026-10-15", 20),
        ("2026-10-16", 0),
        ("2026-10-17", 20),
    ]


def test_registry_rejects_duplicate_prefix():
    clash = HabitModule("water2", "Eau", "hydr", ("hydr.extra",), lambda store, day: False)
    registry = default_registry()
    with pytest.raises(ValueError, match="prefix"):
        registry.register(clash)


def test_registry_rejects_duplicate_name():
    with pytest.raises(ValueError, match="already registered"):
        ModuleRegistry([hydration.MODULE, hydration.MODULE])


def test_module_keys_must_match_prefix():
    with pytest.raises(ValueError, match="outside module prefix"):
        HabitModule("bad", "Bad", "bad", ("hydr.goal",), lambda store, day: False)


def test_custom_module_participates(mem_store):
    always = HabitModule("meditation", "Méditation", "zen", ("zen.log",), lambda store, day: True)
    assert compute_score(mem_store, [*FOUR, always], DAY) == 20


def test_default_registry_key_layout():
    keys = {key for module in default_registry() for key in module.keys}
    assert {
        "hydr.goal",
        "hydr.logs",
        "sleep.goal",
        "sleep.log",
        "notes.cats",
        "notes.active",
        "notes.items",
        "look.tasks",
        "look.done",
    } <= keys


def test_tracker_cells_drive_score_refresh(mem_store, today):
    h = Hydration(mem_store, today)
    assert {cell.key for cell in h.cells()} == {hydration.GOAL_KEY, hydration.LOG_KEY}
    scores = []
    for cell in h.cells():
        cell.subscribe(lambda value: scores.append(compute_score(mem_store, day=DAY)))
    h.add(1000)
    h.add(1500)
    assert scores == [0, 20]


def test_every_tracker_exposes_its_keys(mem_store, today):
    for tracker, module in [
        (Notes(mem_store, today), notes.MODULE),
        (Grooming(mem_store, today), grooming.MODULE),
        (Strength(mem_store, today), strength.MODULE),
        (Sleep(mem_store, today), sleep.MODULE),
    ]:
        assert {cell.key for cell in tracker.cells()} == set(module.keys)
