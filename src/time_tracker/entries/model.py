from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one work session.

    ``check_in`` is None only when the stored value could not be parsed.
    ``hours`` is present iff the entry was closed through the check-out flow.
    ``date`` is the YYYY-MM-DD bucket fixed at creation.
    """

    entry_id: int
    user_id: int
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    hours: Optional[float]
    date: str
    notes: Optional[str] = None
    is_manual_entry: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "user_id": self.user_id,
            "check_in": _iso(self.check_in),
            "check_out": _iso(self.check_out),
            "hours": self.hours,
            "date": self.date,
            "notes": self.notes,
            "is_manual_entry": self.is_manual_entry,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class EntryFilter:
    """Inclusive bounds on the stored ``date`` field; limit applies after ordering."""

    date_from: Optional[str] = None
    date_to: Optional[str] = None
    limit: Optional[int] = None
