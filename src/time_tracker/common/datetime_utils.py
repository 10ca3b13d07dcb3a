from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}") from None


def format_date(value: date) -> str:
    """Zero-padded YYYY-MM-DD. Lexicographic order equals chronological order."""
    return value.strftime(DATE_FORMAT)


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant sent by a client.

    Aware instants (e.g. ``2024-01-10T09:00:00.000Z``) are converted to the
    server's local wall clock and returned naive.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Invalid timestamp")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}") from None
    return to_local_naive(parsed)


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetimes become naive server-local wall clock; naive ones pass through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def normalize_db_datetime(value: Any) -> Optional[datetime]:
    """Normalize DATETIME values across drivers.

    mysql-connector returns datetime objects, sqlite3 returns the stored text.
    Unparseable values come back as None so callers can treat them as corrupt.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def normalize_db_date(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return format_date(value)
    return str(value)


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def month_start(day: date) -> date:
    return day.replace(day=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
