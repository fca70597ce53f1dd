"""Tests for discipline/hydration.py."""

from discipline import hydration
from discipline.hydration import Hydration


def test_defaults(mem_store, today):
    h = Hydration(mem_store, today)
    assert h.goal == 2500
    assert h.ml() == 0
    assert h.done() is False


def test_quarter_litres_towards_goal(mem_store, today):
    h = Hydration(mem_store, today)
    for _ in range(4):
        h.add(250)
    assert h.ml() == 1000
    assert h.done() is False

    for _ in range(2):
        h.add(250)
    assert h.ml() == 1500
    assert h.done() is False

    for _ in range(4):
        h.add(250)
    assert h.ml() == 2500
    assert h.done() is True


def test_undo_never_goes_negative(mem_store, today):
    h = Hydration(mem_store, today)
    h.add(hydration.UNDO_ML)
    assert h.ml() == 0
    h.add(330)
    h.add(-250)
    h.add(-250)
    assert h.ml() == 0


def test_adds_persist_under_today(mem_store, today):
    h = Hydration(mem_store, today)
    h.add(500)
    assert mem_store.read(hydration.LOG_KEY, None) == {"2026-10-17": {"ml": 500}}


def test_goal_change_persists_and_rescores(mem_store, today):
    h = Hydration(mem_store, today)
    h.add(2000)
    assert h.done() is False
    h.set_goal(2000)
    assert mem_store.read(hydration.GOAL_KEY, None) == 2000
    assert h.done() is True
    assert h.set_goal(-5) == 0


def test_progress_caps_at_100(mem_store, today):
    h = Hydration(mem_store, today)
    h.add(750)
    assert h.progress() == (750, 2500, 30)
    h.add(5000)
    assert h.progress()[2] == 100


def test_progress_with_zero_goal(mem_store, today):
    h = Hydration(mem_store, today)
    h.set_goal(0)
    h.add(1)
    assert h.progress()[2] == 100


def test_is_done_reads_store_not_cell(mem_store, today):
    h = Hydration(mem_store, today)
    for _ in range(10):
        h.add(250)
    # A fresh read straight from storage agrees with the tracker
    assert hydration.is_done(mem_store, "2026-10-17") is True
    assert hydration.is_done(mem_store, "2026-10-16") is False


def test_history_window(mem_store, today):
    mem_store.write(hydration.LOG_KEY, {"2026-10-16": {"ml": 1250}, "2026-10-17": {"ml": 2500}})
    points = Hydration(mem_store, today).history(7)
    assert len(points) == 7
    assert points[0].day == "2026-10-11"
    assert points[0].value == 0
    assert (points[-2].value, points[-2].pct) == (1250, 50)
    assert (points[-1].label, points[-1].pct) == ("Sat", 100)


def test_corrupt_goal_falls_back(mem_store, today):
    mem_store.backend.data[hydration.GOAL_KEY] = "not-json"
    assert Hydration(mem_store, today).goal == 2500
    mem_store.write(hydration.GOAL_KEY, "lots")
    assert hydration.read_goal(mem_store) == 2500


def test_non_finite_amounts_are_ignored(mem_store, today):
    h = Hydration(mem_store, today)
    h.add(1000)
    assert h.add("nan") == 1000
    assert h.add("inf") == 1000
    assert h.add(float("-inf")) == 1000
    assert h.progress() == (1000, 2500, 40)
    assert [p.pct for p in h.history(1)] == [40]


def test_non_finite_goal_keeps_default(mem_store, today):
    h = Hydration(mem_store, today)
    assert h.set_goal("inf") == 2500
    mem_store.write(hydration.GOAL_KEY, "nan")
    assert Hydration(mem_store, today).goal == 2500
