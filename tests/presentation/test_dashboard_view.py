from __future__ import annotations

from datetime import datetime

import pytest

from time_tracker.entries.model import TimeEntry
from time_tracker.presentation.dashboard import build_dashboard_view, entry_row, render_dashboard
from time_tracker.summary.aggregator import BucketStats, Summary

NOW = datetime(2024, 1, 10, 12, 0)

SUMMARY = Summary(
    today=BucketStats(count=2, hours=1.5),
    this_week=BucketStats(count=3, hours=10.25),
    this_month=BucketStats(count=5, hours=20.0),
)


def _closed() -> TimeEntry:
    return TimeEntry(
        entry_id=1,
        user_id=1,
        check_in=datetime(2024, 1, 10, 8, 0),
        check_out=datetime(2024, 1, 10, 9, 30),
        hours=1.5,
        date="2024-01-10",
    )


def _open() -> TimeEntry:
    return TimeEntry(
        entry_id=2,
        user_id=1,
        check_in=datetime(2024, 1, 10, 11, 0),
        check_out=None,
        hours=None,
        date="2024-01-10",
    )


def test_idle_dashboard_offers_check_in():
    view = build_dashboard_view(entries=[_closed()], summary=SUMMARY, now=NOW)

    assert view.is_checked_in is False
    assert view.can_check_in is True
    assert view.can_check_out is False
    assert view.live_hours == 0.0

    body = render_dashboard(view)
    assert body["status"] == "Not Checked In"
    assert body["lastAction"] == "Ready to start your day!"
    assert body["today"] == {"hours": "1.50 hrs", "sessions": "2 sessions"}
    assert body["thisWeek"] == {"hours": "10.25 hrs", "days": "3 days worked"}
    assert body["thisMonth"] == {"hours": "20.00 hrs", "days": "5 days worked"}


def test_open_session_adds_live_hours_to_today():
    view = build_dashboard_view(entries=[_open(), _closed()], summary=SUMMARY, now=NOW)

    assert view.is_checked_in is True
    assert view.can_check_out is True
    assert view.live_hours == pytest.approx(1.0)
    assert view.today_hours == pytest.approx(2.5)

    body = render_dashboard(view)
    assert body["status"] == "Checked In"
    assert body["lastAction"] == "Working since 11:00"
    assert body["openEntryId"] == 2
    assert body["buttons"] == {"checkIn": False, "checkOut": True}
    assert body["today"]["hours"] == "2.50 hrs"


def test_explicit_open_entry_wins_over_listed_entries():
    older_open = _open()
    view = build_dashboard_view(entries=[_closed()], summary=SUMMARY, now=NOW, open_entry=older_open)

    assert view.open_entry is older_open


def test_rows_format_times_and_hours():
    closed = entry_row(_closed(), NOW)
    live = entry_row(_open(), datetime(2024, 1, 10, 11, 45))

    assert (closed.check_in, closed.check_out, closed.hours, closed.is_live) == ("08:00", "09:30", "1.50", False)
    assert (live.check_out, live.hours, live.is_live) == ("-", "0.75 (live)", True)


def test_live_hours_follow_clock_skew():
    view = build_dashboard_view(entries=[_open()], summary=SUMMARY, now=datetime(2024, 1, 10, 10, 30))

    assert view.live_hours == pytest.approx(-0.5)


def test_views_are_rebuilt_not_mutated():
    first = build_dashboard_view(entries=[_open()], summary=SUMMARY, now=NOW)
    second = build_dashboard_view(entries=[_open()], summary=SUMMARY, now=datetime(2024, 1, 10, 13, 0))

    assert first.live_hours == pytest.approx(1.0)
    assert second.live_hours == pytest.approx(2.0)
