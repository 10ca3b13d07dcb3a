from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import EntryFilter, TimeEntry


class TimeEntryRepository(Protocol):
    """Every method is scoped to an owner; rows of other users are invisible."""

    def create_entry(
        self,
        *,
        user_id: int,
        check_in: datetime,
        date: str,
        check_out: Optional[datetime] = None,
        hours: Optional[float] = None,
        notes: Optional[str] = None,
        is_manual_entry: bool = False,
    ) -> int:
        raise NotImplementedError

    def get_for_user(self, user_id: int, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        user_id: int,
        entry_id: int,
        check_out: datetime,
        hours: float,
        notes: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def list_for_user(self, user_id: int, entry_filter: EntryFilter) -> Sequence[TimeEntry]:
        """Ordered by date DESC, check_in DESC."""

        raise NotImplementedError

    def delete_for_user(self, user_id: int, entry_id: int) -> bool:
        raise NotImplementedError
