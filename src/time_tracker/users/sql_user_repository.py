from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.sql_base import db_cursor, fetchone, render
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, name, email, password_hash, created_at"


def _to_user(row: Dict[str, Any]) -> User:
    created_at = row.get("created_at")
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=str(created_at) if created_at is not None else None,
    )


class SQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(render(f"SELECT {_COLUMNS} FROM users WHERE user_id=?", self._conn_factory), (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(render(f"SELECT {_COLUMNS} FROM users WHERE email=?", self._conn_factory), (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, name: str, email: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                render("INSERT INTO users(name, email, password_hash) VALUES(?,?,?)", self._conn_factory),
                (name, email, password_hash),
            )
            return int(cur.lastrowid)
