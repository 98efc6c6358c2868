"""Day-off ledger: which dates are exempt from breaking a streak, and the monthly quota."""

import logging
from typing import List

from models import DayOffSettings, month_of, normalize_date

logger = logging.getLogger(__name__)


class DayOffLedger:
    """Operations over an explicitly passed DayOffSettings record.

    Every method is total: a malformed date gives False (or 0), never an
    exception. Persisting the settings afterwards is the caller's job.
    """

    def __init__(self, settings: DayOffSettings):
        self.settings = settings

    @property
    def limit(self) -> int:
        return self.settings.day_off_limit

    @property
    def records(self) -> List[str]:
        return self.settings.day_off_records

    def is_day_off(self, day) -> bool:
        key = normalize_date(day)
        return key is not None and key in self.records

    def used_in_month(self, month: str) -> int:
        return sum(1 for d in self.records if month_of(d) == month)

    def remaining(self, today) -> int:
        key = normalize_date(today)
        if key is None:
            return 0
        return max(0, self.limit - self.used_in_month(month_of(key)))

    def over_quota(self, today) -> bool:
        key = normalize_date(today)
        return key is not None and self.used_in_month(month_of(key)) > self.limit

    def can_take_day_off(self, today) -> bool:
        key = normalize_date(today)
        if key is None or key in self.records:
            return False
        return self.used_in_month(month_of(key)) < self.limit

    def take_day_off(self, today) -> bool:
        if not self.can_take_day_off(today):
            return False
        key = normalize_date(today)
        self.records.append(key)
        logger.info("Day off taken for %s", key)
        return True

    def undo_day_off(self, today) -> bool:
        key = normalize_date(today)
        if key is None or key not in self.records:
            return False
        self.records.remove(key)
        logger.info("Day off undone for %s", key)
        return True

    def purge_stale_records(self, current_month: str) -> int:
        """Drop every record outside current_month; returns how many went."""
        kept = [d for d in self.records if month_of(d) == current_month]
        removed = len(self.records) - len(kept)
        self.settings.day_off_records = kept
        if removed:
            logger.info("Purged %d day-off record(s) from before %s", removed, current_month)
        return removed

    def update_quota(self, new_limit) -> bool:
        # lowering the limit never removes days already taken
        if isinstance(new_limit, bool) or not isinstance(new_limit, int) or new_limit < 0:
            logger.warning("Rejected day-off limit %r", new_limit)
            return False
        self.settings.day_off_limit = new_limit
        return True
