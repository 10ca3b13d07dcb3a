from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .connection import SQLITE, DatabaseConnection
from .sql_base import db_cursor, fetchall

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parent / "sql"


def schema_path_for(backend: str) -> Path:
    return SQL_DIR / f"{backend}.sql"


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False

    for ch in sql:
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Optional[Union[str, Path]] = None) -> None:
    schema_path = Path(schema_path) if schema_path else schema_path_for(conn_factory.backend)
    sql = schema_path.read_text(encoding="utf-8")

    with db_cursor(conn_factory) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)

    logger.info("Applied schema %s to %s", schema_path.name, conn_factory.config.describe())


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory) as (_, cur):
        if conn_factory.backend == SQLITE:
            cur.execute("SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name")
            return [r["name"] for r in fetchall(cur)]
        cur.execute("SHOW TABLES")
        return [next(iter(r.values())) for r in fetchall(cur)]
