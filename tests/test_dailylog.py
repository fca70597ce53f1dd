"""Tests for discipline/dailylog.py: immutable per-day upserts."""

from discipline import dailylog
from discipline.dailylog import DailyLog


def _add_ml(amount):
    def update(record):
        record["ml"] = record.get("ml", 0) + amount
        return record

    return update


def test_get_missing_day():
    assert dailylog.get({}, "2026-10-17") is None
    assert dailylog.get({"2026-10-17": {"ml": 1}}, "2026-10-17") == {"ml": 1}


def test_upsert_leaves_other_days_untouched():
    yesterday = {"ml": 2000}
    log = {"2026-10-16": yesterday, "2026-10-17": {"ml": 250}}
    new = dailylog.upsert(log, "2026-10-17", _add_ml(250))
    assert new["2026-10-17"] == {"ml": 500}
    assert new["2026-10-16"] is yesterday
    assert new["2026-10-16"] == {"ml": 2000}


def test_upsert_does_not_mutate_input_log():
    log = {"2026-10-17": {"ml": 250}}
    dailylog.upsert(log, "2026-10-17", _add_ml(250))
    assert log == {"2026-10-17": {"ml": 250}}


def test_upsert_uses_empty_record_for_new_day():
    new = dailylog.upsert({}, "2026-10-17", _add_ml(330), empty=lambda: {"ml": 0})
    assert new == {"2026-10-17": {"ml": 330}}


def test_daily_log_persists_each_upsert(mem_store, today):
    log = DailyLog(mem_store, "hydr.logs", lambda: {"ml": 0}, today)
    log.upsert_today(_add_ml(500))
    assert mem_store.read("hydr.logs", None) == {"2026-10-17": {"ml": 500}}
    assert log.today() == {"ml": 500}


def test_daily_log_ignores_non_mapping_storage(mem_store, today):
    mem_store.write("hydr.logs", [1, 2, 3])
    log = DailyLog(mem_store, "hydr.logs", lambda: {"ml": 0}, today)
    assert log.data == {}
    log.upsert_today(_add_ml(250))
    assert mem_store.read("hydr.logs", None) == {"2026-10-17": {"ml": 250}}


def test_daily_log_replaces_malformed_record(mem_store, today):
    mem_store.write("hydr.logs", {"2026-10-17": "junk", "2026-10-16": {"ml": 100}})
    log = DailyLog(mem_store, "hydr.logs", lambda: {"ml": 0}, today)
    log.upsert_today(_add_ml(250))
    assert log.data == {"2026-10-17": {"ml": 250}, "2026-10-16": {"ml": 100}}


def test_window_fills_missing_days(mem_store, today):
    mem_store.write("hydr.logs", {"2026-10-15": {"ml": 1000}, "2026-10-01": {"ml": 9}})
    log = DailyLog(mem_store, "hydr.logs", lambda: {"ml": 0}, today)
    window = log.window(3)
    assert window == [
        ("2026-10-15", {"ml": 1000}),
        ("2026-10-16", {"ml": 0}),
        ("2026-10-17", {"ml": 0}),
    ]
