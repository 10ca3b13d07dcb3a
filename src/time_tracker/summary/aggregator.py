from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import format_date, month_start, now_local, week_start
from ..entries.model import EntryFilter, TimeEntry
from ..entries.repository import TimeEntryRepository


@dataclass(frozen=True)
class BucketStats:
    count: int
    hours: float


@dataclass(frozen=True)
class Summary:
    today: BucketStats
    this_week: BucketStats
    this_month: BucketStats

    def to_dict(self) -> dict:
        return {
            "today": {"sessions": self.today.count, "hours": self.today.hours},
            "thisWeek": {"days": self.this_week.count, "hours": self.this_week.hours},
            "thisMonth": {"days": self.this_month.count, "hours": self.this_month.hours},
        }


def _stored_hours(entries: Iterable[TimeEntry]) -> float:
    # Open sessions and manual entries without computed hours add nothing.
    return float(sum(e.hours or 0.0 for e in entries))


class Aggregator:
    """Today / this-week / this-month statistics for one user.

    Bucket rules:
    - today: stored ``date`` equals today; count is the number of sessions.
    - week: stored ``date`` >= Monday of this week, no upper bound; count is
      the number of distinct check-in calendar dates.
    - month: stored ``date`` >= the 1st, no upper bound; count is the number
      of distinct stored ``date`` values.

    The two "days worked" conventions differ on purpose and existing reports
    depend on both. Bounds are compared as YYYY-MM-DD strings.
    """

    def __init__(self, entries: TimeEntryRepository):
        self._entries = entries

    def summarize(self, user_id: int, *, now: Optional[datetime] = None) -> Summary:
        today = (now or now_local()).date()
        return Summary(
            today=self.today_stats(user_id, today),
            this_week=self.week_stats(user_id, today),
            this_month=self.month_stats(user_id, today),
        )

    def today_stats(self, user_id: int, today: date) -> BucketStats:
        day = format_date(today)
        rows = self._entries.list_for_user(user_id, EntryFilter(date_from=day, date_to=day))
        return BucketStats(count=len(rows), hours=_stored_hours(rows))

    def week_stats(self, user_id: int, today: date) -> BucketStats:
        rows = self._entries.list_for_user(user_id, EntryFilter(date_from=format_date(week_start(today))))
        days = {e.check_in.date() for e in rows if e.check_in is not None}
        return BucketStats(count=len(days), hours=_stored_hours(rows))

    def month_stats(self, user_id: int, today: date) -> BucketStats:
        rows = self._entries.list_for_user(user_id, EntryFilter(date_from=format_date(month_start(today))))
        days = {e.date for e in rows}
        return BucketStats(count=len(days), hours=_stored_hours(rows))
