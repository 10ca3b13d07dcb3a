"""Dashboard view-state.

Each refresh builds a new immutable ``DashboardView`` from the entries,
the stored summary and the current instant; ``render_dashboard`` turns it
into plain data. Nothing is cached between refreshes, so a view can be
built or read at any tick without coordination.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import SECONDS_PER_HOUR, TIME_FORMAT
from ..entries.model import TimeEntry
from ..summary.aggregator import Summary


@dataclass(frozen=True)
class EntryRow:
    entry_id: int
    date: str
    check_in: str
    check_out: str
    hours: str
    is_live: bool


@dataclass(frozen=True)
class DashboardView:
    now: datetime
    open_entry: Optional[TimeEntry]
    summary: Summary
    rows: tuple[EntryRow, ...]

    @property
    def is_checked_in(self) -> bool:
        return self.open_entry is not None

    @property
    def can_check_in(self) -> bool:
        return not self.is_checked_in

    @property
    def can_check_out(self) -> bool:
        return self.is_checked_in

    @property
    def live_hours(self) -> float:
        if self.open_entry is None:
            return 0.0
        return _live_hours(self.open_entry, self.now)

    @property
    def today_hours(self) -> float:
        """Stored hours for today plus the running session."""
        return self.summary.today.hours + self.live_hours


def _fmt_time(value: Optional[datetime]) -> str:
    return value.strftime(TIME_FORMAT) if value is not None else "-"


def _live_hours(entry: TimeEntry, now: datetime) -> float:
    # The cosmetic ticker shows raw elapsed time, negative clock skew included.
    if entry.check_in is None:
        return 0.0
    return (now - entry.check_in).total_seconds() / SECONDS_PER_HOUR


def entry_row(entry: TimeEntry, now: datetime) -> EntryRow:
    is_live = entry.is_open and entry.check_in is not None
    if is_live:
        hours = f"{_live_hours(entry, now):.2f} (live)"
    else:
        hours = f"{float(entry.hours or 0):.2f}"
    return EntryRow(
        entry_id=entry.entry_id,
        date=entry.date,
        check_in=_fmt_time(entry.check_in),
        check_out=_fmt_time(entry.check_out),
        hours=hours,
        is_live=is_live,
    )


def build_dashboard_view(
    *,
    entries: Sequence[TimeEntry],
    summary: Summary,
    now: datetime,
    open_entry: Optional[TimeEntry] = None,
) -> DashboardView:
    if open_entry is None:
        open_entry = next((e for e in entries if e.is_open), None)
    return DashboardView(
        now=now,
        open_entry=open_entry,
        summary=summary,
        rows=tuple(entry_row(e, now) for e in entries),
    )


def render_dashboard(view: DashboardView) -> dict:
    if view.is_checked_in:
        status = "Checked In"
        last_action = f"Working since {_fmt_time(view.open_entry.check_in)}"
    else:
        status = "Not Checked In"
        last_action = "Ready to start your day!"

    summary = view.summary
    return {
        "status": status,
        "lastAction": last_action,
        "isCheckedIn": view.is_checked_in,
        "openEntryId": view.open_entry.entry_id if view.open_entry else None,
        "buttons": {"checkIn": view.can_check_in, "checkOut": view.can_check_out},
        "today": {"hours": f"{view.today_hours:.2f} hrs", "sessions": f"{summary.today.count} sessions"},
        "thisWeek": {"hours": f"{summary.this_week.hours:.2f} hrs", "days": f"{summary.this_week.count} days worked"},
        "thisMonth": {
            "hours": f"{summary.this_month.hours:.2f} hrs",
            "days": f"{summary.this_month.count} days worked",
        },
        "entries": [
            {
                "id": r.entry_id,
                "date": r.date,
                "checkIn": r.check_in,
                "checkOut": r.check_out,
                "hours": r.hours,
                "live": r.is_live,
            }
            for r in view.rows
        ],
    }
