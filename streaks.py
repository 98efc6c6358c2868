"""Streak engine: how a habit's run of completed days grows, survives gaps, or resets.

Two halves live here. ``complete_habit`` / ``uncomplete_habit`` update a
habit incrementally as the user ticks it off. The history functions below
them recount streaks from a list of completion dates, which the repair
action and the analytics service use.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from models import Habit, dates_between, days_between, normalize_date

logger = logging.getLogger(__name__)

COMPLETED = "completed"
ALREADY_DONE = "already_done"
OUT_OF_ORDER = "out_of_order"


def gap_is_bridged(last: str, today: str, is_day_off: Callable[[str], bool]) -> bool:
    """True when today continues the run ending at last.

    Consecutive days always continue it. A longer gap continues it only if
    every day strictly between the two is a day off.
    """
    gap = days_between(last, today)
    if gap == 1:
        return True
    if gap < 1:
        return False
    return all(is_day_off(day) for day in dates_between(last, today))


def complete_habit(habit: Habit, today: str, ledger) -> str:
    """Mark habit done on today, consulting ledger for any skipped days.

    Returns COMPLETED, ALREADY_DONE (same day, nothing changes) or
    OUT_OF_ORDER when today is earlier than the last completion; the habit
    is left untouched in that case.
    """
    last = normalize_date(habit.last_completed_date) if habit.last_completed_date else None
    if last == today:
        return ALREADY_DONE
    if habit.last_completed_date and last is None:
        logger.warning(
            "Habit %s has unreadable last date %r; counting as first completion",
            habit.id,
            habit.last_completed_date,
        )

    if last is None:
        habit.streak = 1
    else:
        if days_between(last, today) <= 0:
            logger.warning(
                "Rejected completion of habit %s on %s: last completed %s", habit.id, today, last
            )
            return OUT_OF_ORDER
        if gap_is_bridged(last, today, ledger.is_day_off):
            habit.streak += 1
        else:
            habit.streak = 1

    habit.last_completed_date = today
    return COMPLETED


def uncomplete_habit(habit: Habit, today: str, same_day_only: bool = True) -> bool:
    """One-step reversal of today's completion; returns whether anything changed.

    This does not restore the date the streak had before today, and a gap
    that was bridged by days off is not reconstructed: completing and undoing
    repeatedly can leave the streak below its real length.
    ``tracker.HabitTracker.rebuild_streak`` recounts it from the log.
    """
    if not same_day_only or habit.last_completed_date != today:
        return False
    habit.last_completed_date = ""
    habit.streak = max(0, habit.streak - 1)
    return True


# -------- History --------
def _clean_dates(dates: Iterable[str], until: Optional[str] = None) -> List[str]:
    cleaned = {normalize_date(d) for d in dates}
    cleaned.discard(None)
    if until is not None:
        cleaned = {d for d in cleaned if d <= until}
    return sorted(cleaned)


def streak_runs(
    dates: Iterable[str], is_day_off: Callable[[str], bool]
) -> List[Tuple[str, str, int]]:
    """Split completion dates into runs as (first_date, last_date, length)."""
    runs: List[Tuple[str, str, int]] = []
    for day in _clean_dates(dates):
        if runs and gap_is_bridged(runs[-1][1], day, is_day_off):
            start, _, length = runs[-1]
            runs[-1] = (start, day, length + 1)
        else:
            runs.append((day, day, 1))
    return runs


def longest_streak(dates: Iterable[str], is_day_off: Callable[[str], bool]) -> int:
    runs = streak_runs(dates, is_day_off)
    return max((length for _, _, length in runs), default=0)


def streak_ending_at_last(dates: Iterable[str], is_day_off: Callable[[str], bool]) -> int:
    runs = streak_runs(dates, is_day_off)
    return runs[-1][2] if runs else 0


def current_streak(dates: Iterable[str], today: str, is_day_off: Callable[[str], bool]) -> int:
    """Length of the run that is still alive today, or 0.

    A run is alive if it ends today, or if completing today would extend it.
    """
    runs = streak_runs(_clean_dates(dates, until=today), is_day_off)
    if not runs:
        return 0
    _, last, length = runs[-1]
    if last == today or gap_is_bridged(last, today, is_day_off):
        return length
    return 0
