from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from time_tracker.database.bootstrap import apply_schema, list_tables
from time_tracker.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())

    db_config = DBConfig.from_settings(
        backend=getattr(settings, "DB_BACKEND", "sqlite"),
        sqlite_path=getattr(settings, "SQLITE_PATH", "database/timetracker.db"),
        db_config=getattr(settings, "DB_CONFIG", {}),
    )
    conn = DatabaseConnection(db_config).open()
    try:
        apply_schema(conn)
        tables = list_tables(conn)
    finally:
        conn.close()
    logging.getLogger("init_db").info("OK: schema applied -> %s (tables=%d)", db_config.describe(), len(tables))


if __name__ == "__main__":
    main()
