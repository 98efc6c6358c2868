"""Date-indexed log of which habits were completed on which day."""

from typing import Dict, Iterable, List

from models import CompletionEntry, normalize_date


class CompletionLog:
    """Wraps the stored ``{date: [{routineId, habitId}]}`` mapping.

    Each date holds a set of entries; empty dates are dropped so the stored
    mapping never accumulates blank days.
    """

    def __init__(self, raw: Dict[str, List[dict]] = None):
        self.days: Dict[str, List[CompletionEntry]] = {}
        for day, entries in (raw or {}).items():
            for item in entries:
                if "routineId" in item and "habitId" in item:
                    self.add(day, item["routineId"], item["habitId"])

    def to_dict(self) -> Dict[str, List[dict]]:
        return {day: [e.to_dict() for e in entries] for day, entries in sorted(self.days.items())}

    def add(self, day, routine_id: str, habit_id: str) -> bool:
        key = normalize_date(day)
        if key is None:
            return False
        entry = CompletionEntry(routine_id, habit_id)
        bucket = self.days.setdefault(key, [])
        if entry in bucket:
            return False
        bucket.append(entry)
        return True

    def remove(self, day, routine_id: str, habit_id: str) -> bool:
        key = normalize_date(day)
        bucket = self.days.get(key, [])
        entry = CompletionEntry(routine_id, habit_id)
        if entry not in bucket:
            return False
        bucket.remove(entry)
        if not bucket:
            del self.days[key]
        return True

    def for_date(self, day) -> List[CompletionEntry]:
        return list(self.days.get(normalize_date(day), []))

    def is_completed(self, day, routine_id: str, habit_id: str) -> bool:
        return CompletionEntry(routine_id, habit_id) in self.days.get(normalize_date(day), [])

    def dates_for(self, routine_id: str, habit_id: str) -> List[str]:
        entry = CompletionEntry(routine_id, habit_id)
        return sorted(day for day, bucket in self.days.items() if entry in bucket)

    def _filter(self, keep) -> int:
        removed = 0
        for day in list(self.days):
            bucket = [e for e in self.days[day] if keep(e)]
            removed += len(self.days[day]) - len(bucket)
            if bucket:
                self.days[day] = bucket
            else:
                del self.days[day]
        return removed

    def drop_routine(self, routine_id: str) -> int:
        return self._filter(lambda e: e.routine_id != routine_id)

    def drop_habits(self, routine_id: str, keep_ids: Iterable[str]) -> int:
        """Remove the routine's entries whose habit id is not in keep_ids."""
        keep = set(keep_ids)
        return self._filter(lambda e: e.routine_id != routine_id or e.habit_id in keep)
