from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import mysql.connector
from mysql.connector.constants import ClientFlag

from ..core.exceptions import StorageError

SQLITE = "sqlite"
MYSQL = "mysql"


@dataclass(frozen=True)
class DBConfig:
    backend: str = SQLITE
    sqlite_path: str = "data/timetracker.db"
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "timetracker_db"

    @classmethod
    def from_settings(cls, *, backend: str, sqlite_path: str, db_config: Optional[dict] = None) -> "DBConfig":
        db_config = db_config or {}
        backend = (backend or SQLITE).lower()
        if backend not in {SQLITE, MYSQL}:
            raise ValueError(f"Unsupported DB_BACKEND: {backend!r}")
        return cls(
            backend=backend,
            sqlite_path=str(sqlite_path),
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "timetracker_db")),
        )

    def describe(self) -> str:
        if self.backend == SQLITE:
            return f"sqlite:{self.sqlite_path}"
        return f"mysql:{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """DB connection factory with an explicit open/close lifecycle.

    Repositories receive an instance and create short-lived connections per
    operation. The instance is constructed once by the container, opened at
    startup and closed at shutdown.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._opened = False

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def backend(self) -> str:
        return self._config.backend

    @property
    def placeholder(self) -> str:
        return "?" if self.backend == SQLITE else "%s"

    @property
    def is_open(self) -> bool:
        return self._opened

    def open(self) -> "DatabaseConnection":
        if self.backend == SQLITE:
            Path(self._config.sqlite_path).parent.mkdir(parents=True, exist_ok=True)
        conn = self._raw_connect()
        conn.close()
        self._opened = True
        return self

    def close(self) -> None:
        self._opened = False

    def connect(self):
        if not self._opened:
            raise StorageError("Database connection is closed")
        return self._raw_connect()

    def cursor(self, conn) -> Any:
        """Cursor whose rows can be read by column name."""
        if self.backend == SQLITE:
            return conn.cursor()
        return conn.cursor(dictionary=True)

    def _raw_connect(self):
        try:
            if self.backend == SQLITE:
                conn = sqlite3.connect(self._config.sqlite_path)
                conn.row_factory = sqlite3.Row
                conn.execute("PRAGMA foreign_keys = ON")
                return conn
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                # rowcount reports matched rows, as sqlite3 does
                client_flags=[ClientFlag.FOUND_ROWS],
            )
        except (sqlite3.Error, mysql.connector.Error) as e:
            raise StorageError("Could not connect to the database") from e
