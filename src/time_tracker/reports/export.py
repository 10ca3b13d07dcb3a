"""Weekly spreadsheet export.

Builds a two-sheet ``.xlsx`` workbook: a ``Summary`` sheet listing every
entry of the week followed by per-user totals, and one sheet per user with
that user's entries and total.
"""

from __future__ import annotations

import io
import re
from datetime import date, datetime
from typing import Mapping, Optional, Sequence

import pandas as pd
from openpyxl.utils import get_column_letter

from ..common.datetime_utils import format_date
from ..core.constants import TIME_FORMAT
from ..entries.model import TimeEntry
from ..users.model import User

WORKING_LABEL = "Working…"
SUMMARY_SHEET = "Summary"
SUMMARY_COLUMN_WIDTHS = [22, 12, 12, 12, 12, 40]
USER_COLUMN_WIDTHS = [12, 12, 12, 12, 40]

_INVALID_SHEET_CHARS = re.compile(r"[:\\/?*\[\]]")


def safe_sheet_name(name: Optional[str]) -> str:
    out = _INVALID_SHEET_CHARS.sub("", str(name or "Sheet"))
    if not out.strip():
        out = "Sheet"
    return out[:31]


def export_filename(week_range: tuple[date, date]) -> str:
    start, end = week_range
    return f"TimeTracker_Week_{format_date(start)}_to_{format_date(end)}.xlsx"


def _fmt_time(value: Optional[datetime]) -> str:
    return value.strftime(TIME_FORMAT) if value is not None else ""


def _check_out_cell(entry: TimeEntry) -> str:
    if entry.check_out is not None:
        return _fmt_time(entry.check_out)
    return WORKING_LABEL if entry.check_in is not None else ""


def _entry_cells(entry: TimeEntry) -> list:
    return [
        entry.date or "",
        _fmt_time(entry.check_in),
        _check_out_cell(entry),
        float(entry.hours or 0),
        entry.notes or "",
    ]


def total_hours(entries: Sequence[TimeEntry]) -> float:
    return float(sum(e.hours or 0 for e in entries))


def _display_name(user: User) -> str:
    return user.name or user.email


def summary_rows(
    users: Sequence[User],
    entries_by_email: Mapping[str, Sequence[TimeEntry]],
    week_range: tuple[date, date],
) -> list[list]:
    start, end = week_range
    rows: list[list] = [
        ["Weekly Summary", f"{format_date(start)} to {format_date(end)}"],
        [],
        ["User Name", "Date", "Check In", "Check Out", "Total Hours", "Notes"],
    ]
    for user in users:
        for entry in entries_by_email.get(user.email, []):
            rows.append([_display_name(user), *_entry_cells(entry)])

    rows.append([])
    rows.append(["WEEKLY TOTALS:"])
    rows.append(["User Name", "Total Hours"])
    for user in users:
        total = total_hours(entries_by_email.get(user.email, []))
        rows.append([_display_name(user), f"{total:.2f}"])
    return rows


def user_rows(user: User, entries: Sequence[TimeEntry]) -> list[list]:
    rows: list[list] = [
        [user.name or user.email or "User"],
        [],
        ["Date", "Check In", "Check Out", "Total Hours", "Notes"],
    ]
    rows.extend(_entry_cells(e) for e in entries)
    rows.append([])
    rows.append(["Total Hours", f"{total_hours(entries):.2f}"])
    return rows


def _write_sheet(writer: pd.ExcelWriter, sheet_name: str, rows: list[list], widths: list[int]) -> None:
    width = max(len(r) for r in rows)
    padded = [list(r) + [None] * (width - len(r)) for r in rows]
    pd.DataFrame(padded, dtype=object).to_excel(writer, sheet_name=sheet_name, index=False, header=False)
    worksheet = writer.sheets[sheet_name]
    for idx, width in enumerate(widths, start=1):
        worksheet.column_dimensions[get_column_letter(idx)].width = width


class WeeklyReportExporter:
    def build(self, user: User, entries: Sequence[TimeEntry], week_range: tuple[date, date]) -> bytes:
        user_sheet = safe_sheet_name(user.name or "User")
        if user_sheet == SUMMARY_SHEET:
            user_sheet = f"{SUMMARY_SHEET} (user)"

        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            _write_sheet(
                writer,
                SUMMARY_SHEET,
                summary_rows([user], {user.email: entries}, week_range),
                SUMMARY_COLUMN_WIDTHS,
            )
            _write_sheet(writer, user_sheet, user_rows(user, entries), USER_COLUMN_WIDTHS)
        return out.getvalue()
