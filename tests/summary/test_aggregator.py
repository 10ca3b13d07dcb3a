from __future__ import annotations

from datetime import date, datetime

import pytest

from time_tracker.common.datetime_utils import month_start, week_start
from time_tracker.entries.model import TimeEntry
from time_tracker.summary.aggregator import Aggregator


def _entry(entry_id, *, check_in, date, check_out=None, hours=None, user_id=1, manual=False):
    return TimeEntry(
        entry_id=entry_id,
        user_id=user_id,
        check_in=check_in,
        check_out=check_out,
        hours=hours,
        date=date,
        is_manual_entry=manual,
    )


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2024, 1, 10), date(2024, 1, 8)),
        (date(2024, 1, 8), date(2024, 1, 8)),
        (date(2024, 1, 14), date(2024, 1, 8)),
        (date(2024, 1, 1), date(2024, 1, 1)),
        (date(2024, 3, 1), date(2024, 2, 26)),
    ],
)
def test_week_start_is_monday(day, expected):
    assert week_start(day) == expected


def test_month_start():
    assert month_start(date(2024, 1, 31)) == date(2024, 1, 1)


def test_today_counts_sessions_and_sums_stored_hours(entries_repo, fixed_now):
    entries_repo.add(
        _entry(
            1,
            check_in=datetime(2024, 1, 10, 8, 0),
            check_out=datetime(2024, 1, 10, 9, 30),
            hours=1.5,
            date="2024-01-10",
        )
    )
    entries_repo.add(_entry(2, check_in=datetime(2024, 1, 10, 11, 0), date="2024-01-10"))

    stats = Aggregator(entries_repo).summarize(1, now=fixed_now)

    assert stats.today.count == 2
    assert stats.today.hours == pytest.approx(1.5)


def test_empty_user_has_zero_everywhere(entries_repo, fixed_now):
    summary = Aggregator(entries_repo).summarize(1, now=fixed_now)

    assert summary.to_dict() == {
        "today": {"sessions": 0, "hours": 0.0},
        "thisWeek": {"days": 0, "hours": 0.0},
        "thisMonth": {"days": 0, "hours": 0.0},
    }


def test_week_and_month_count_days_differently(entries_repo, fixed_now):
    # Manual entry checked in on Monday but bucketed under Tuesday.
    entries_repo.add(
        _entry(
            1,
            check_in=datetime(2024, 1, 8, 9, 0),
            check_out=datetime(2024, 1, 8, 17, 0),
            date="2024-01-09",
            manual=True,
        )
    )
    entries_repo.add(_entry(2, check_in=datetime(2024, 1, 9, 9, 0), date="2024-01-09"))

    summary = Aggregator(entries_repo).summarize(1, now=fixed_now)

    assert summary.this_week.count == 2
    assert summary.this_month.count == 1


def test_week_bucket_starts_on_monday(entries_repo, fixed_now):
    entries_repo.add(
        _entry(1, check_in=datetime(2024, 1, 7, 9, 0), check_out=datetime(2024, 1, 7, 10, 0), hours=1.0, date="2024-01-07")
    )
    entries_repo.add(
        _entry(2, check_in=datetime(2024, 1, 8, 9, 0), check_out=datetime(2024, 1, 8, 11, 0), hours=2.0, date="2024-01-08")
    )

    summary = Aggregator(entries_repo).summarize(1, now=fixed_now)

    assert summary.this_week.count == 1
    assert summary.this_week.hours == pytest.approx(2.0)
    assert summary.this_month.count == 2
    assert summary.this_month.hours == pytest.approx(3.0)


def test_future_dated_entries_fall_into_week_and_month(entries_repo, fixed_now):
    entries_repo.add(
        _entry(1, check_in=datetime(2024, 2, 2, 9, 0), check_out=datetime(2024, 2, 2, 13, 0), hours=4.0, date="2024-02-02")
    )

    summary = Aggregator(entries_repo).summarize(1, now=fixed_now)

    assert summary.today.count == 0
    assert summary.this_week.hours == pytest.approx(4.0)
    assert summary.this_month.hours == pytest.approx(4.0)


def test_previous_month_is_excluded(entries_repo):
    entries_repo.add(
        _entry(1, check_in=datetime(2024, 1, 31, 9, 0), check_out=datetime(2024, 1, 31, 10, 0), hours=1.0, date="2024-01-31")
    )

    # Thursday 2024-02-01: same week as Jan 31, new month.
    summary = Aggregator(entries_repo).summarize(1, now=datetime(2024, 2, 1, 9, 0))

    assert summary.this_week.count == 1
    assert summary.this_month.count == 0
    assert summary.this_month.hours == 0.0


def test_other_users_entries_are_ignored(entries_repo, fixed_now):
    entries_repo.add(
        _entry(1, check_in=datetime(2024, 1, 10, 9, 0), check_out=datetime(2024, 1, 10, 10, 0), hours=1.0, date="2024-01-10", user_id=2)
    )

    summary = Aggregator(entries_repo).summarize(1, now=fixed_now)

    assert summary.today.count == 0
    assert summary.this_month.hours == 0.0


def test_week_ignores_entries_with_unreadable_check_in(entries_repo, fixed_now):
    entries_repo.add(_entry(1, check_in=None, date="2024-01-10"))

    summary = Aggregator(entries_repo).summarize(1, now=fixed_now)

    assert summary.today.count == 1
    assert summary.this_week.count == 0
    assert summary.this_month.count == 1
