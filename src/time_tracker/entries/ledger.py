from __future__ import annotations

import math
from datetime import date as date_type
from datetime import datetime
from typing import Optional, Sequence, Union

from ..common.datetime_utils import format_date, parse_iso_date, to_local_naive
from ..common.validators import optional_positive_int
from ..core.constants import MAX_DB_INT, OPEN_SESSION_LOOKBACK, SECONDS_PER_HOUR
from ..core.exceptions import NotFoundError, ValidationError
from .model import EntryFilter, TimeEntry
from .repository import TimeEntryRepository


def compute_hours(check_in: Optional[datetime], check_out: Optional[datetime]) -> float:
    """Elapsed hours, clamped to 0 when negative, non-finite or uncomputable."""
    if check_in is None or check_out is None:
        return 0.0
    hours = (check_out - check_in).total_seconds() / SECONDS_PER_HOUR
    if not math.isfinite(hours) or hours < 0:
        return 0.0
    return hours


def _storable_id(entry_id: int) -> bool:
    return 0 < entry_id <= MAX_DB_INT


class SessionLedger:
    """Owns the time entries of each user.

    Every operation takes the authenticated ``user_id``; an entry owned by
    someone else behaves exactly like a missing one (NotFoundError).

    A second ``open`` while an entry is still open is accepted. Callers that
    need at most one open session check ``find_open`` first.

    Instants are stored as naive server-local time; aware ones are converted
    on the way in.
    """

    def __init__(self, entries: TimeEntryRepository):
        self._entries = entries

    def open(self, user_id: int, check_in: Optional[datetime], notes: Optional[str] = None) -> int:
        if check_in is None:
            raise ValidationError("Check-in time is required")
        check_in = to_local_naive(check_in)
        return self._entries.create_entry(
            user_id=user_id,
            check_in=check_in,
            date=format_date(check_in),
            notes=notes,
        )

    def close(
        self,
        user_id: int,
        entry_id: int,
        check_out: Optional[datetime],
        notes: Optional[str] = None,
    ) -> float:
        if check_out is None:
            raise ValidationError("Check-out time required")
        check_out = to_local_naive(check_out)

        entry = self.get(user_id, entry_id)

        hours = compute_hours(entry.check_in, check_out)
        # Notes are replaced, not merged; None clears them.
        if not self._entries.update_checkout(
            user_id=user_id,
            entry_id=entry_id,
            check_out=check_out,
            hours=hours,
            notes=notes,
        ):
            raise NotFoundError("Not found")
        return hours

    def create_manual(
        self,
        user_id: int,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        date: Union[str, date_type, None] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Backfill an entry with both timestamps known.

        Hours are NOT computed here; the entry keeps ``hours=None`` until it
        is closed through ``close``.
        """
        if check_in is None or check_out is None:
            raise ValidationError("Check-in and check-out times are required")
        check_in = to_local_naive(check_in)
        check_out = to_local_naive(check_out)

        if date is None:
            bucket = format_date(check_in)
        elif isinstance(date, date_type):
            bucket = format_date(date)
        else:
            bucket = format_date(parse_iso_date(date))

        return self._entries.create_entry(
            user_id=user_id,
            check_in=check_in,
            check_out=check_out,
            date=bucket,
            notes=notes,
            is_manual_entry=True,
        )

    def list(
        self,
        user_id: int,
        *,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: object = None,
    ) -> Sequence[TimeEntry]:
        entry_filter = EntryFilter(
            date_from=format_date(parse_iso_date(date_from)) if date_from else None,
            date_to=format_date(parse_iso_date(date_to)) if date_to else None,
            limit=optional_positive_int(limit, "limit"),
        )
        return self._entries.list_for_user(user_id, entry_filter)

    def get(self, user_id: int, entry_id: int) -> TimeEntry:
        if not _storable_id(entry_id):
            raise NotFoundError("Not found")
        entry = self._entries.get_for_user(user_id, entry_id)
        if not entry:
            raise NotFoundError("Not found")
        return entry

    def delete(self, user_id: int, entry_id: int) -> None:
        if not _storable_id(entry_id) or not self._entries.delete_for_user(user_id, entry_id):
            raise NotFoundError("Not found")

    def find_open(self, user_id: int) -> Optional[TimeEntry]:
        recent = self._entries.list_for_user(user_id, EntryFilter(limit=OPEN_SESSION_LOOKBACK))
        return next((e for e in recent if e.is_open), None)
