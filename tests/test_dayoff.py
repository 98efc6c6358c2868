from dayoff import DayOffLedger
from models import DayOffSettings


def make_ledger(records=(), limit=3):
    return DayOffLedger(DayOffSettings(day_off_limit=limit, day_off_records=list(records)))


def test_is_day_off():
    ledger = make_ledger(["2025-01-11"])
    assert ledger.is_day_off("2025-01-11")
    assert not ledger.is_day_off("2025-01-12")
    assert not ledger.is_day_off("not a date")


def test_cannot_take_same_day_twice_even_with_quota_left():
    ledger = make_ledger(["2025-01-11"], limit=10)
    assert not ledger.can_take_day_off("2025-01-11")
    assert not ledger.take_day_off("2025-01-11")
    assert ledger.records == ["2025-01-11"]


def test_quota_exhausted():
    ledger = make_ledger(["2025-01-02", "2025-01-05", "2025-01-07"], limit=3)
    assert not ledger.can_take_day_off("2025-01-10")
    assert not ledger.take_day_off("2025-01-10")
    assert len(ledger.records) == 3
    assert ledger.remaining("2025-01-10") == 0


def test_quota_counts_only_current_month():
    ledger = make_ledger(["2024-12-29", "2024-12-30", "2024-12-31"], limit=3)
    assert ledger.can_take_day_off("2025-01-10")
    assert ledger.take_day_off("2025-01-10")
    assert ledger.used_in_month("2025-01") == 1


def test_take_then_undo_restores_records():
    ledger = make_ledger(["2025-01-02", "2025-01-05"])
    before = list(ledger.records)
    assert ledger.take_day_off("2025-01-10")
    assert ledger.undo_day_off("2025-01-10")
    assert ledger.records == before


def test_undo_without_record():
    ledger = make_ledger()
    assert not ledger.undo_day_off("2025-01-10")
    assert not ledger.undo_day_off("garbage")


def test_purge_keeps_only_current_month():
    ledger = make_ledger(["2024-11-30", "2024-12-31", "2025-01-02", "2025-01-03"])
    assert ledger.purge_stale_records("2025-01") == 2
    assert all(d.startswith("2025-01") for d in ledger.records)
    assert ledger.records == ["2025-01-02", "2025-01-03"]


def test_lowering_quota_keeps_taken_days():
    ledger = make_ledger(["2025-01-02", "2025-01-03"], limit=3)
    assert ledger.update_quota(1)
    assert ledger.records == ["2025-01-02", "2025-01-03"]
    assert ledger.over_quota("2025-01-10")
    assert not ledger.can_take_day_off("2025-01-10")


def test_update_quota_rejects_bad_values():
    ledger = make_ledger(limit=3)
    assert not ledger.update_quota(-1)
    assert not ledger.update_quota("5")
    assert not ledger.update_quota(True)
    assert ledger.limit == 3


def test_settings_from_dict_dedupes_records():
    settings = DayOffSettings.from_dict(
        {"dayOffLimit": 2, "dayOffRecords": ["2025-01-02", "2025-01-02", "junk"]}
    )
    assert settings.day_off_records == ["2025-01-02"]
    assert settings.day_off_limit == 2
