from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import format_date, month_start, now_local, week_start
from ..core.exceptions import NotFoundError, ValidationError
from ..entries.ledger import SessionLedger
from ..entries.model import TimeEntry
from ..users.repository import UserRepository
from .export import WeeklyReportExporter, export_filename, total_hours

PERIODS = ("daily", "weekly", "monthly")


def current_week_range(today: date) -> tuple[date, date]:
    start = week_start(today)
    return start, start + timedelta(days=6)


def current_month_range(today: date) -> tuple[date, date]:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return month_start(today), today.replace(day=last_day)


@dataclass(frozen=True)
class RangeReport:
    period: str
    start: date
    end: date
    entries: Sequence[TimeEntry]
    total_hours: float

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "startDate": format_date(self.start),
            "endDate": format_date(self.end),
            "totalHours": self.total_hours,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes


class ReportService:
    """Daily/weekly/monthly range reports and the weekly spreadsheet."""

    def __init__(
        self,
        ledger: SessionLedger,
        users: UserRepository,
        *,
        exporter: Optional[WeeklyReportExporter] = None,
    ):
        self._ledger = ledger
        self._users = users
        self._exporter = exporter or WeeklyReportExporter()

    def range_for(self, period: str, today: date) -> tuple[date, date]:
        if period == "daily":
            return today, today
        if period == "weekly":
            return current_week_range(today)
        if period == "monthly":
            return current_month_range(today)
        raise ValidationError(f"period must be one of {', '.join(PERIODS)}")

    def range_report(self, user_id: int, period: str, *, today: Optional[date] = None) -> RangeReport:
        today = today or now_local().date()
        start, end = self.range_for(period, today)
        entries = self._ledger.list(user_id, date_from=format_date(start), date_to=format_date(end))
        return RangeReport(period=period, start=start, end=end, entries=entries, total_hours=total_hours(entries))

    def weekly_export(self, user_id: int, *, today: Optional[date] = None) -> ExportFile:
        today = today or now_local().date()
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        week_range = current_week_range(today)
        start, end = week_range
        entries = self._ledger.list(user_id, date_from=format_date(start), date_to=format_date(end))
        return ExportFile(filename=export_filename(week_range), content=self._exporter.build(user, entries, week_range))
