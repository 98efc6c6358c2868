# models.py
"""Routine, habit and day-off records plus the date helpers every module shares."""
import random
import re
import time
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

DATE_FORMAT = "%Y-%m-%d"
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


# -------- Dates --------
def format_date(d: Optional[date] = None) -> str:
    return (d or date.today()).strftime(DATE_FORMAT)


def parse_date(raw: str) -> date:
    return datetime.strptime(raw.strip(), DATE_FORMAT).date()


def normalize_date(value) -> Optional[str]:
    """Canonical YYYY-MM-DD for a date or date string; None if it is not one."""
    if isinstance(value, date):
        return format_date(value)
    if not isinstance(value, str):
        return None
    try:
        return format_date(parse_date(value))
    except ValueError:
        return None


def month_of(date_str: str) -> str:
    return date_str[:7]


def current_month(d: Optional[date] = None) -> str:
    return month_of(format_date(d))


def days_between(start: str, end: str) -> int:
    """Whole calendar days from start to end; negative when end is earlier."""
    return (parse_date(end) - parse_date(start)).days


def dates_between(start: str, end: str) -> List[str]:
    """Dates strictly between start and end, oldest first."""
    first = parse_date(start)
    gap = days_between(start, end)
    return [format_date(first + timedelta(days=i)) for i in range(1, gap)]


def is_valid_time(raw: str) -> bool:
    return isinstance(raw, str) and bool(TIME_PATTERN.match(raw))


def generate_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{random.randint(0, 9999)}"


def new_habit_id() -> str:
    return generate_id("habit")


def new_routine_id() -> str:
    return generate_id("routine")


# -------- Records --------
def _streak_value(raw) -> int:
    try:
        return max(0, int(raw or 0))
    except (TypeError, ValueError):
        return 0


@dataclass
class Habit:
    title: str
    time: str
    streak: int = 0
    last_completed_date: str = ""
    id: str = field(default_factory=new_habit_id)

    @classmethod
    def from_dict(cls, raw: Dict) -> "Habit":
        return cls(
            title=raw.get("title", ""),
            time=raw.get("time", ""),
            streak=_streak_value(raw.get("streak", 0)),
            last_completed_date=raw.get("lastCompletedDate", "") or "",
            id=raw.get("id") or new_habit_id(),
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "time": self.time,
            "streak": self.streak,
            "lastCompletedDate": self.last_completed_date,
        }


@dataclass
class Routine:
    id: str
    name: str
    habits: List[Habit] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict) -> "Routine":
        return cls(
            id=raw["id"],
            name=raw.get("name", ""),
            habits=[Habit.from_dict(h) for h in raw.get("habits", [])],
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "habits": [h.to_dict() for h in self.habits],
        }

    def habit_at(self, index: int) -> Optional[Habit]:
        if not isinstance(index, int) or index < 0 or index >= len(self.habits):
            return None
        return self.habits[index]


@dataclass
class DayOffSettings:
    day_off_limit: int = 3
    day_off_records: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict, default_limit: int = 3) -> "DayOffSettings":
        records: List[str] = []
        for value in raw.get("dayOffRecords", []):
            day = normalize_date(value)
            if day and day not in records:
                records.append(day)
        limit = raw.get("dayOffLimit", default_limit)
        return cls(
            day_off_limit=limit if isinstance(limit, int) and limit >= 0 else default_limit,
            day_off_records=records,
        )

    def to_dict(self) -> Dict:
        return {
            "dayOffLimit": self.day_off_limit,
            "dayOffRecords": list(self.day_off_records),
        }


@dataclass(frozen=True)
class CompletionEntry:
    routine_id: str
    habit_id: str

    def to_dict(self) -> Dict:
        return {"routineId": self.routine_id, "habitId": self.habit_id}
