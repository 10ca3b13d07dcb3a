from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from time_tracker import close_app, create_app
from time_tracker.entries.model import EntryFilter, TimeEntry
from time_tracker.users.model import User


class InMemoryTimeEntries:
    """Mirrors the SQL repository: owner scoping, inclusive date bounds,
    ORDER BY date DESC, check_in DESC, then LIMIT."""

    def __init__(self):
        self.rows: dict[int, TimeEntry] = {}
        self._id = 0

    def add(self, entry: TimeEntry) -> TimeEntry:
        self.rows[entry.entry_id] = entry
        self._id = max(self._id, entry.entry_id)
        return entry

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
        self._id += 1
        self.rows[self._id] = TimeEntry(
            entry_id=self._id,
            user_id=user_id,
            check_in=check_in,
            check_out=check_out,
            hours=hours,
            date=date,
            notes=notes,
            is_manual_entry=is_manual_entry,
        )
        return self._id

    def get_for_user(self, user_id: int, entry_id: int) -> Optional[TimeEntry]:
        entry = self.rows.get(entry_id)
        if entry is None or entry.user_id != user_id:
            return None
        return entry

    def update_checkout(self, *, user_id: int, entry_id: int, check_out: datetime, hours: float, notes=None) -> bool:
        entry = self.get_for_user(user_id, entry_id)
        if entry is None:
            return False
        self.rows[entry_id] = replace(entry, check_out=check_out, hours=hours, notes=notes)
        return True

    def list_for_user(self, user_id: int, entry_filter: EntryFilter):
        items = [e for e in self.rows.values() if e.user_id == user_id]
        if entry_filter.date_from:
            items = [e for e in items if e.date >= entry_filter.date_from]
        if entry_filter.date_to:
            items = [e for e in items if e.date <= entry_filter.date_to]
        items.sort(key=lambda e: (e.date, e.check_in or datetime.min), reverse=True)
        if entry_filter.limit is not None:
            items = items[: entry_filter.limit]
        return items

    def delete_for_user(self, user_id: int, entry_id: int) -> bool:
        if self.get_for_user(user_id, entry_id) is None:
            return False
        del self.rows[entry_id]
        return True


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[int, User] = {}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)

    def create_user(self, *, name: str, email: str, password_hash: str) -> int:
        user_id = len(self.by_id) + 1
        self.by_id[user_id] = User(user_id=user_id, name=name, email=email, password_hash=password_hash)
        return user_id


@pytest.fixture
def fixed_now() -> datetime:
    # A Wednesday.
    return datetime(2024, 1, 10, 12, 0, 0)


@pytest.fixture
def entries_repo() -> InMemoryTimeEntries:
    return InMemoryTimeEntries()


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def app(tmp_path):
    app = create_app("config.testing", overrides={"SQLITE_PATH": str(tmp_path / "timetracker.db")})
    yield app
    close_app(app)


@pytest.fixture
def client(app):
    return app.test_client()


def register_and_login(client, *, name="Alice", email="alice@example.com", password="secret123") -> dict:
    client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    token = response.get_json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client) -> dict:
    return register_and_login(client)


@pytest.fixture
def login(client):
    def _login(**kwargs) -> dict:
        return register_and_login(client, **kwargs)

    return _login
