from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StorageError
from .connection import DatabaseConnection

DRIVER_ERRORS = (sqlite3.Error, mysql.connector.Error)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection):
    """Yield ``(conn, cur)``; commit on success, roll back on error.

    Driver errors are re-raised as StorageError so callers never see
    storage internals.
    """
    conn = conn_factory.connect()
    try:
        cur = conn_factory.cursor(conn)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except DRIVER_ERRORS as e:
        conn.rollback()
        raise StorageError("Database error") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return dict(row) if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return [dict(r) for r in rows or []]


def render(sql: str, conn_factory: DatabaseConnection) -> str:
    """Queries are written with ``?``; swap in the driver's placeholder."""
    if conn_factory.placeholder == "?":
        return sql
    return sql.replace("?", conn_factory.placeholder)
