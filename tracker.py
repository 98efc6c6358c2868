"""Everything the UI can ask for, each action one load/mutate/persist cycle.

Mutating methods return ``(value, error)``. ``error`` is None on success
or a message for the user. When only the write failed, the mutated value
is still returned next to the error so the UI can say it was not saved.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

import streaks
from completions import CompletionLog
from config import DEFAULT_DAY_OFF_LIMIT
from dayoff import DayOffLedger
from models import (
    CompletionEntry,
    DayOffSettings,
    Habit,
    Routine,
    format_date,
    month_of,
    normalize_date,
    parse_date,
)
from quotes import quote_for
from repo_json import JSONRepo
from routines import NOT_FOUND, RoutineBook

logger = logging.getLogger(__name__)

ROUTINES_KEY = "routines"
SETTINGS_KEY = "settings"
COMPLETIONS_KEY = "completions"
NOTES_KEY = "notes"
DAILY_NOTES_KEY = "dailyNotes"

INVALID_DATE = "Dates must look like YYYY-MM-DD."
HABIT_NOT_FOUND = "Habit not found."


class HabitTracker:
    def __init__(self, repo: JSONRepo, default_day_off_limit: int = DEFAULT_DAY_OFF_LIMIT):
        self.repo = repo
        self.default_day_off_limit = default_day_off_limit

    # -------- Load / save --------
    def _book(self) -> RoutineBook:
        return RoutineBook.from_list(self.repo.get(ROUTINES_KEY, []))

    def _settings(self) -> DayOffSettings:
        return DayOffSettings.from_dict(
            self.repo.get(SETTINGS_KEY, {}), default_limit=self.default_day_off_limit
        )

    def _log(self) -> CompletionLog:
        return CompletionLog(self.repo.get(COMPLETIONS_KEY, {}))

    def _save(self, values: Dict) -> Optional[str]:
        if self.repo.set_many(values):
            return None
        return self.repo.last_error or "Failed to save data."

    @staticmethod
    def _day(value=None) -> Optional[str]:
        return format_date() if value is None else normalize_date(value)

    # -------- Startup --------
    def init_app_data(self, today=None) -> Tuple[bool, Optional[str]]:
        """Fill in missing keys, upgrade old log entries, drop last month's days off."""
        today = self._day(today)
        if today is None:
            return False, INVALID_DATE

        book = self._book()
        settings = self._settings()
        purged = DayOffLedger(settings).purge_stale_records(month_of(today))
        log = self._migrate_log(self.repo.get(COMPLETIONS_KEY, {}), book)

        values = {
            ROUTINES_KEY: book.to_list(),
            SETTINGS_KEY: settings.to_dict(),
            COMPLETIONS_KEY: log.to_dict(),
        }
        if not self.repo.has(NOTES_KEY):
            values[NOTES_KEY] = ""
        if not self.repo.has(DAILY_NOTES_KEY):
            values[DAILY_NOTES_KEY] = {}
        error = self._save(values)
        if error is None:
            logger.info(
                "Loaded %d routine(s); purged %d stale day-off record(s)", len(book.routines), purged
            )
        return error is None, error

    @staticmethod
    def _migrate_log(raw: Dict[str, List[dict]], book: RoutineBook) -> CompletionLog:
        # older data addressed habits by position; pin those entries to habit ids
        upgraded: Dict[str, List[dict]] = {}
        dropped = 0
        for day, entries in raw.items():
            for item in entries:
                if "habitId" not in item and "habitIndex" in item:
                    _, habit = book.habit_at(item.get("routineId"), item["habitIndex"])
                    if habit is None:
                        dropped += 1
                        continue
                    item = {"routineId": item["routineId"], "habitId": habit.id}
                upgraded.setdefault(day, []).append(item)
        if dropped:
            logger.warning("Dropped %d completion entries pointing at missing habits", dropped)
        return CompletionLog(upgraded)

    # -------- Routines --------
    def list_routines(self) -> List[Routine]:
        return self._book().routines

    def get_routine(self, routine_id: str) -> Optional[Routine]:
        return self._book().get(routine_id)

    def add_routine(self, name: str, habits: Iterable) -> Tuple[Optional[Routine], Optional[str]]:
        book = self._book()
        routine, error = book.add_routine(name, habits)
        if error:
            return None, error
        logger.info("Added routine %s (%s)", routine.id, routine.name)
        return routine, self._save({ROUTINES_KEY: book.to_list()})

    def update_routine(
        self, routine_id: str, name: Optional[str] = None, habits: Optional[Iterable] = None
    ) -> Tuple[Optional[Routine], Optional[str]]:
        book = self._book()
        routine, error = book.update_routine(routine_id, name=name, habits=habits)
        if error:
            return None, error
        values = {ROUTINES_KEY: book.to_list()}
        if habits is not None:
            log = self._log()
            if log.drop_habits(routine.id, [h.id for h in routine.habits]):
                values[COMPLETIONS_KEY] = log.to_dict()
        return routine, self._save(values)

    def delete_routine(self, routine_id: str) -> Tuple[bool, Optional[str]]:
        book = self._book()
        if not book.delete_routine(routine_id):
            return False, NOT_FOUND
        log = self._log()
        log.drop_routine(routine_id)
        logger.info("Deleted routine %s", routine_id)
        error = self._save({ROUTINES_KEY: book.to_list(), COMPLETIONS_KEY: log.to_dict()})
        return error is None, error

    # -------- Completion & streak --------
    def _locate(self, book: RoutineBook, routine_id: str, habit_index: int):
        routine, habit = book.habit_at(routine_id, habit_index)
        if routine is None:
            return None, None, NOT_FOUND
        if habit is None:
            return routine, None, HABIT_NOT_FOUND
        return routine, habit, None

    def complete_habit(
        self, routine_id: str, habit_index: int, today=None
    ) -> Tuple[Optional[Habit], Optional[str]]:
        """Mark a habit done; the streak and the completion log are saved together."""
        today = self._day(today)
        if today is None:
            return None, INVALID_DATE
        book = self._book()
        routine, habit, error = self._locate(book, routine_id, habit_index)
        if error:
            return None, error

        status = streaks.complete_habit(habit, today, DayOffLedger(self._settings()))
        if status == streaks.OUT_OF_ORDER:
            return None, (
                f"Cannot complete on {today}: this habit was last completed on "
                f"{habit.last_completed_date}."
            )
        log = self._log()
        logged = log.add(today, routine.id, habit.id)
        if status == streaks.ALREADY_DONE and not logged:
            return habit, None
        logger.debug("Habit %s on %s: %s, streak %d", habit.id, today, status, habit.streak)
        return habit, self._save({ROUTINES_KEY: book.to_list(), COMPLETIONS_KEY: log.to_dict()})

    def uncomplete_habit(
        self, routine_id: str, habit_index: int, today=None, same_day_only: bool = True
    ) -> Tuple[Optional[Habit], Optional[str]]:
        """Take back a completion on today; the streak only rolls back for same-day undo."""
        today = self._day(today)
        if today is None:
            return None, INVALID_DATE
        book = self._book()
        routine, habit, error = self._locate(book, routine_id, habit_index)
        if error:
            return None, error

        log = self._log()
        unlogged = log.remove(today, routine.id, habit.id)
        reversed_ = streaks.uncomplete_habit(habit, today, same_day_only)
        if not (unlogged or reversed_):
            return habit, None
        return habit, self._save({ROUTINES_KEY: book.to_list(), COMPLETIONS_KEY: log.to_dict()})

    def rebuild_streak(
        self, routine_id: str, habit_index: int, today=None
    ) -> Tuple[Optional[Habit], Optional[str]]:
        """Recount streak and last date from the completion log.

        Only days off still on record count as bridges, so runs spanning an
        earlier month can come out shorter than they were.
        """
        today = self._day(today)
        if today is None:
            return None, INVALID_DATE
        book = self._book()
        routine, habit, error = self._locate(book, routine_id, habit_index)
        if error:
            return None, error

        ledger = DayOffLedger(self._settings())
        dates = [d for d in self._log().dates_for(routine.id, habit.id) if d <= today]
        habit.streak = streaks.streak_ending_at_last(dates, ledger.is_day_off)
        habit.last_completed_date = dates[-1] if dates else ""
        logger.info("Rebuilt streak for habit %s: %d", habit.id, habit.streak)
        return habit, self._save({ROUTINES_KEY: book.to_list()})

    # -------- Day off --------
    def is_day_off(self, day=None) -> bool:
        return DayOffLedger(self._settings()).is_day_off(self._day(day))

    def can_take_day_off(self, today=None) -> bool:
        return DayOffLedger(self._settings()).can_take_day_off(self._day(today))

    def take_day_off(self, today=None) -> Tuple[bool, Optional[str]]:
        today = self._day(today)
        if today is None:
            return False, INVALID_DATE
        settings = self._settings()
        ledger = DayOffLedger(settings)
        if ledger.is_day_off(today):
            return False, "You already took today off."
        if not ledger.take_day_off(today):
            return False, "No days off left this month."
        error = self._save({SETTINGS_KEY: settings.to_dict()})
        return error is None, error

    def undo_day_off(self, today=None) -> Tuple[bool, Optional[str]]:
        today = self._day(today)
        if today is None:
            return False, INVALID_DATE
        settings = self._settings()
        if not DayOffLedger(settings).undo_day_off(today):
            return False, None
        error = self._save({SETTINGS_KEY: settings.to_dict()})
        return error is None, error

    def update_day_off_limit(self, new_limit) -> Tuple[bool, Optional[str]]:
        settings = self._settings()
        if not DayOffLedger(settings).update_quota(new_limit):
            return False, "The day-off limit must be a whole number of 0 or more."
        error = self._save({SETTINGS_KEY: settings.to_dict()})
        return error is None, error

    def day_off_status(self, today=None) -> Dict:
        today = self._day(today) or format_date()
        ledger = DayOffLedger(self._settings())
        return {
            "limit": ledger.limit,
            "used": ledger.used_in_month(month_of(today)),
            "remaining": ledger.remaining(today),
            "taken_today": ledger.is_day_off(today),
            "over_quota": ledger.over_quota(today),
        }

    def day_off_records(self) -> List[str]:
        return sorted(self._settings().day_off_records)

    # -------- History --------
    def completions_for_date(self, day=None) -> List[CompletionEntry]:
        return self._log().for_date(self._day(day))

    def is_completed(self, routine_id: str, habit_id: str, day=None) -> bool:
        return self._log().is_completed(self._day(day), routine_id, habit_id)

    def completion_dates(self, routine_id: str, habit_id: str) -> List[str]:
        return self._log().dates_for(routine_id, habit_id)

    # -------- Notes & quote --------
    def get_notes(self) -> str:
        return self.repo.get(NOTES_KEY, "")

    def set_notes(self, text: str) -> Tuple[bool, Optional[str]]:
        error = self._save({NOTES_KEY: text or ""})
        return error is None, error

    def get_daily_note(self, day=None) -> str:
        return self.repo.get(DAILY_NOTES_KEY, {}).get(self._day(day), "")

    def set_daily_note(self, day, text: str) -> Tuple[bool, Optional[str]]:
        key = self._day(day)
        if key is None:
            return False, INVALID_DATE
        notes = self.repo.get(DAILY_NOTES_KEY, {})
        if text and text.strip():
            notes[key] = text
        else:
            notes.pop(key, None)
        error = self._save({DAILY_NOTES_KEY: notes})
        return error is None, error

    def todays_quote(self, today=None) -> str:
        day = self._day(today)
        return quote_for(parse_date(day) if day else date.today())
