"""Routine collection with case-insensitive unique names."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from models import Habit, Routine, is_valid_time, new_routine_id

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "A routine with this name already exists!"
NOT_FOUND = "Routine not found."


def name_key(name: str) -> str:
    return name.strip().casefold()


def _field(raw, name: str, default=""):
    if isinstance(raw, Habit):
        return getattr(raw, name, default)
    return raw.get(name, default)


def validate_habits(habits: Iterable) -> Optional[str]:
    """Error message for the first unusable habit, or None."""
    for position, raw in enumerate(habits, start=1):
        title = (_field(raw, "title") or "").strip()
        if not title:
            return f"Habit {position} needs a title."
        if not is_valid_time(_field(raw, "time")):
            return f"Habit {position} needs a time as HH:MM."
    return None


def parse_habit_lines(text: str, existing: Iterable[Habit] = ()) -> List[dict]:
    """Turn "HH:MM Title" editor lines into habit dicts for update_routine.

    Lines keep the id of an existing habit so its streak and history
    survive the edit. A line with the same title as an existing habit takes
    that habit's id, first come first served when titles repeat. Lines left
    over (edited titles) take the unclaimed id of the habit that sat at the
    same position; anything else is a new habit.
    """
    existing = list(existing)
    habits = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        time, _, title = line.partition(" ")
        habits.append({"time": time.strip(), "title": title.strip()})

    by_title: Dict[str, List[str]] = {}
    for habit in existing:
        by_title.setdefault(habit.title.strip().casefold(), []).append(habit.id)

    unmatched = []
    for position, habit in enumerate(habits):
        ids = by_title.get(habit["title"].casefold())
        if ids:
            habit["id"] = ids.pop(0)
        else:
            unmatched.append(position)

    claimed = {h["id"] for h in habits if "id" in h}
    for position in unmatched:
        if position < len(existing) and existing[position].id not in claimed:
            habits[position]["id"] = existing[position].id
            claimed.add(existing[position].id)
    return habits


class RoutineBook:
    def __init__(self, routines: List[Routine]):
        self.routines = routines
        self._names: Dict[str, str] = {name_key(r.name): r.id for r in routines}

    @classmethod
    def from_list(cls, raw: List[dict]) -> "RoutineBook":
        return cls([Routine.from_dict(r) for r in raw])

    def to_list(self) -> List[dict]:
        return [r.to_dict() for r in self.routines]

    # -------- Lookup --------
    def get(self, routine_id: str) -> Optional[Routine]:
        return next((r for r in self.routines if r.id == routine_id), None)

    def habit_at(self, routine_id: str, index: int) -> Tuple[Optional[Routine], Optional[Habit]]:
        routine = self.get(routine_id)
        if routine is None:
            return None, None
        return routine, routine.habit_at(index)

    def name_taken(self, name: str, ignore_id: Optional[str] = None) -> bool:
        owner = self._names.get(name_key(name))
        return owner is not None and owner != ignore_id

    # -------- Mutations --------
    def add_routine(self, name: str, habits: Iterable) -> Tuple[Optional[Routine], Optional[str]]:
        name = (name or "").strip()
        habits = list(habits)
        if not name:
            return None, "Routine name is required."
        if self.name_taken(name):
            logger.warning("Rejected duplicate routine name %r", name)
            return None, DUPLICATE_NAME
        error = validate_habits(habits)
        if error:
            return None, error

        routine = Routine(
            id=new_routine_id(),
            name=name,
            habits=[
                Habit(title=_field(h, "title").strip(), time=_field(h, "time"))
                for h in habits
            ],
        )
        self.routines.append(routine)
        self._names[name_key(name)] = routine.id
        return routine, None

    def update_routine(
        self, routine_id: str, name: Optional[str] = None, habits: Optional[Iterable] = None
    ) -> Tuple[Optional[Routine], Optional[str]]:
        """Rename and/or replace the habit list.

        Incoming habits carrying the id of an existing habit keep its streak
        and last completion date; the rest start fresh.
        """
        routine = self.get(routine_id)
        if routine is None:
            return None, NOT_FOUND

        if name is not None:
            name = name.strip()
            if not name:
                return None, "Routine name is required."
            if self.name_taken(name, ignore_id=routine_id):
                logger.warning("Rejected rename of %s to duplicate %r", routine_id, name)
                return None, DUPLICATE_NAME

        new_habits = None
        if habits is not None:
            habits = list(habits)
            error = validate_habits(habits)
            if error:
                return None, error
            existing = {h.id: h for h in routine.habits}
            new_habits = []
            for raw in habits:
                title, time = _field(raw, "title").strip(), _field(raw, "time")
                kept = existing.pop(_field(raw, "id", None), None)
                if kept is not None:
                    kept.title, kept.time = title, time
                    new_habits.append(kept)
                else:
                    new_habits.append(Habit(title=title, time=time))

        if name is not None:
            del self._names[name_key(routine.name)]
            routine.name = name
            self._names[name_key(name)] = routine.id
        if new_habits is not None:
            routine.habits = new_habits
        return routine, None

    def delete_routine(self, routine_id: str) -> bool:
        routine = self.get(routine_id)
        if routine is None:
            return False
        self.routines.remove(routine)
        self._names.pop(name_key(routine.name), None)
        return True
