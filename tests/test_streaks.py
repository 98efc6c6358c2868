import pytest

import streaks
from dayoff import DayOffLedger
from models import DayOffSettings, Habit


def ledger_with(*days):
    return DayOffLedger(DayOffSettings(day_off_records=list(days)))


@pytest.fixture
def habit():
    return Habit(title="Read", time="21:00")


def test_first_completion_starts_streak(habit):
    assert streaks.complete_habit(habit, "2025-01-10", ledger_with()) == streaks.COMPLETED
    assert habit.streak == 1
    assert habit.last_completed_date == "2025-01-10"


def test_same_day_is_idempotent(habit):
    streaks.complete_habit(habit, "2025-01-10", ledger_with())
    streaks.complete_habit(habit, "2025-01-11", ledger_with())
    snapshot = (habit.streak, habit.last_completed_date)
    assert streaks.complete_habit(habit, "2025-01-11", ledger_with()) == streaks.ALREADY_DONE
    assert (habit.streak, habit.last_completed_date) == snapshot


def test_consecutive_day_increments():
    habit = Habit(title="Read", time="21:00", streak=4, last_completed_date="2025-01-31")
    streaks.complete_habit(habit, "2025-02-01", ledger_with())
    assert habit.streak == 5


def test_gap_covered_by_days_off_counts_once():
    habit = Habit(title="Read", time="21:00", streak=3, last_completed_date="2025-01-10")
    streaks.complete_habit(habit, "2025-01-14", ledger_with("2025-01-11", "2025-01-12", "2025-01-13"))
    assert habit.streak == 4
    assert habit.last_completed_date == "2025-01-14"


def test_single_day_off_bridges_gap():
    habit = Habit(title="Read", time="21:00", streak=1, last_completed_date="2025-01-10")
    streaks.complete_habit(habit, "2025-01-12", ledger_with("2025-01-11"))
    assert habit.streak == 2


def test_missed_day_resets():
    habit = Habit(title="Read", time="21:00", streak=1, last_completed_date="2025-01-10")
    streaks.complete_habit(habit, "2025-01-12", ledger_with())
    assert habit.streak == 1


def test_one_uncovered_day_in_gap_resets():
    habit = Habit(title="Read", time="21:00", streak=7, last_completed_date="2025-01-10")
    streaks.complete_habit(habit, "2025-01-14", ledger_with("2025-01-11", "2025-01-13"))
    assert habit.streak == 1


def test_earlier_date_is_rejected():
    habit = Habit(title="Read", time="21:00", streak=5, last_completed_date="2025-01-10")
    assert streaks.complete_habit(habit, "2025-01-08", ledger_with()) == streaks.OUT_OF_ORDER
    assert habit.streak == 5
    assert habit.last_completed_date == "2025-01-10"


def test_unreadable_last_date_counts_as_first():
    habit = Habit(title="Read", time="21:00", streak=9, last_completed_date="yesterday")
    streaks.complete_habit(habit, "2025-01-10", ledger_with())
    assert habit.streak == 1


def test_uncomplete_same_day():
    habit = Habit(title="Read", time="21:00", streak=2, last_completed_date="2025-01-12")
    assert streaks.uncomplete_habit(habit, "2025-01-12", same_day_only=True)
    assert habit.streak == 1
    assert habit.last_completed_date == ""


def test_uncomplete_floors_at_zero():
    habit = Habit(title="Read", time="21:00", streak=0, last_completed_date="2025-01-12")
    streaks.uncomplete_habit(habit, "2025-01-12")
    assert habit.streak == 0


def test_uncomplete_other_day_or_historical_leaves_habit():
    habit = Habit(title="Read", time="21:00", streak=2, last_completed_date="2025-01-12")
    assert not streaks.uncomplete_habit(habit, "2025-01-11")
    assert not streaks.uncomplete_habit(habit, "2025-01-12", same_day_only=False)
    assert (habit.streak, habit.last_completed_date) == (2, "2025-01-12")


def test_runs_split_on_missed_days():
    dates = ["2025-01-07", "2025-01-01", "2025-01-02", "2025-01-05", "2025-01-06", "2025-01-02"]
    runs = streaks.streak_runs(dates, lambda d: False)
    assert runs == [("2025-01-01", "2025-01-02", 2), ("2025-01-05", "2025-01-07", 3)]
    assert streaks.longest_streak(dates, lambda d: False) == 3


def test_runs_join_across_days_off():
    dates = ["2025-01-01", "2025-01-02", "2025-01-05", "2025-01-06"]
    off = {"2025-01-03", "2025-01-04"}
    assert streaks.longest_streak(dates, lambda d: d in off) == 4
    assert streaks.streak_ending_at_last(dates, lambda d: d in off) == 4


def test_current_streak_alive_until_a_day_is_missed():
    dates = ["2025-01-10", "2025-01-11"]
    never = lambda d: False  # noqa: E731
    assert streaks.current_streak(dates, "2025-01-11", never) == 2
    assert streaks.current_streak(dates, "2025-01-12", never) == 2
    assert streaks.current_streak(dates, "2025-01-13", never) == 0
    assert streaks.current_streak(dates, "2025-01-13", lambda d: d == "2025-01-12") == 2


def test_current_streak_ignores_future_dates():
    assert streaks.current_streak(["2025-01-10", "2025-02-01"], "2025-01-10", lambda d: False) == 1
    assert streaks.current_streak([], "2025-01-10", lambda d: False) == 0
