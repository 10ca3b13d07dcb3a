from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import normalize_db_date, normalize_db_datetime
from ..database.connection import DatabaseConnection
from ..database.sql_base import db_cursor, fetchall, fetchone, render
from .model import EntryFilter, TimeEntry
from .repository import TimeEntryRepository

_COLUMNS = "entry_id, user_id, check_in, check_out, hours, date, notes, is_manual_entry, created_at, updated_at"


def _to_db(value: Optional[datetime]) -> Optional[str]:
    # Fixed-width text so check_in ordering is chronological on every backend.
    if value is None:
        return None
    return value.isoformat(sep=" ", timespec="microseconds")


def _to_entry(row: Dict[str, Any]) -> TimeEntry:
    hours = row.get("hours")
    created_at = row.get("created_at")
    updated_at = row.get("updated_at")
    return TimeEntry(
        entry_id=int(row["entry_id"]),
        user_id=int(row["user_id"]),
        check_in=normalize_db_datetime(row.get("check_in")),
        check_out=normalize_db_datetime(row.get("check_out")),
        hours=float(hours) if hours is not None else None,
        date=normalize_db_date(row["date"]),
        notes=row.get("notes"),
        is_manual_entry=bool(row.get("is_manual_entry") or 0),
        created_at=str(created_at) if created_at is not None else None,
        updated_at=str(updated_at) if updated_at is not None else None,
    )


class SQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _sql(self, sql: str) -> str:
        return render(sql, self._conn_factory)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                self._sql(
                    """
                    INSERT INTO time_entries(user_id, check_in, check_out, hours, date, notes, is_manual_entry)
                    VALUES(?,?,?,?,?,?,?)
                    """
                ),
                (int(user_id), _to_db(check_in), _to_db(check_out), hours, date, notes, 1 if is_manual_entry else 0),
            )
            return int(cur.lastrowid)

    def get_for_user(self, user_id: int, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                self._sql(f"SELECT {_COLUMNS} FROM time_entries WHERE entry_id=? AND user_id=?"),
                (int(entry_id), int(user_id)),
            )
            row = fetchone(cur)
            return _to_entry(row) if row else None

    def update_checkout(
        self,
        *,
        user_id: int,
        entry_id: int,
        check_out: datetime,
        hours: float,
        notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                self._sql(
                    """
                    UPDATE time_entries
                    SET check_out=?, hours=?, notes=?, updated_at=CURRENT_TIMESTAMP
                    WHERE entry_id=? AND user_id=?
                    """
                ),
                (_to_db(check_out), float(hours), notes, int(entry_id), int(user_id)),
            )
            return cur.rowcount > 0

    def list_for_user(self, user_id: int, entry_filter: EntryFilter) -> Sequence[TimeEntry]:
        clauses = ["user_id=?"]
        params: list[object] = [int(user_id)]

        if entry_filter.date_from:
            clauses.append("date >= ?")
            params.append(entry_filter.date_from)
        if entry_filter.date_to:
            clauses.append("date <= ?")
            params.append(entry_filter.date_to)

        sql = f"SELECT {_COLUMNS} FROM time_entries WHERE {' AND '.join(clauses)} ORDER BY date DESC, check_in DESC"
        if entry_filter.limit is not None:
            sql += " LIMIT ?"
            params.append(int(entry_filter.limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(self._sql(sql), tuple(params))
            return [_to_entry(r) for r in fetchall(cur)]

    def delete_for_user(self, user_id: int, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                self._sql("DELETE FROM time_entries WHERE entry_id=? AND user_id=?"),
                (int(entry_id), int(user_id)),
            )
            return cur.rowcount > 0
