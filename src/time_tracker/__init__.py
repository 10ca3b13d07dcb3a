"""Time Tracker package.

This package is organized by feature modules (users, entries, summary,
reports, ...) with a thin Flask controller layer over service/repository
layers.
"""
from __future__ import annotations

import atexit
import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.errors import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .entries.controller import register as register_entries
from .presentation.controller import register as register_dashboard
from .reports.controller import register as register_reports
from .summary.controller import register as register_summary
from .users.controller import register as register_users

SETTING_NAMES = (
    "SECRET_KEY",
    "JWT_SECRET",
    "JWT_EXPIRES_DAYS",
    "DB_BACKEND",
    "SQLITE_PATH",
    "DB_CONFIG",
    "DEBUG",
    "TESTING",
    "LOG_LEVEL",
    "AUTO_INIT_DB",
)


def _load_settings(settings_module: str, overrides: Optional[Mapping[str, Any]]) -> dict:
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name) for name in SETTING_NAMES if hasattr(settings, name)}
    values.update(overrides or {})
    return values


def create_app(settings_module: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = _load_settings(settings_module, overrides)

    if not settings.get("JWT_SECRET"):
        raise RuntimeError("JWT_SECRET is not set. Create a .env file with JWT_SECRET.")

    app.secret_key = settings.get("SECRET_KEY")
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.logger.setLevel(getattr(logging, str(settings.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    db_config = DBConfig.from_settings(
        backend=settings.get("DB_BACKEND", "sqlite"),
        sqlite_path=settings.get("SQLITE_PATH", "database/timetracker.db"),
        db_config=settings.get("DB_CONFIG"),
    )
    container = build_container(
        db_config=db_config,
        jwt_secret=settings["JWT_SECRET"],
        token_days=int(settings.get("JWT_EXPIRES_DAYS", 7)),
    )
    atexit.register(container.close)
    app.extensions["time_tracker"] = container

    app.logger.info("[time-tracker] settings=%s db=%s", settings_module, db_config.describe())

    if settings.get("AUTO_INIT_DB"):
        apply_schema(container.conn)
        app.logger.info("[time-tracker] schema ready (tables=%d)", len(list_tables(container.conn)))

    register_error_handlers(app)
    register_users(app, container)
    register_entries(app, container)
    register_summary(app, container)
    register_reports(app, container)
    register_dashboard(app, container)

    @app.route("/healthz", endpoint="healthz")
    def healthz():
        return jsonify({"ok": True})

    return app


def get_container(app: Flask) -> Container:
    return app.extensions["time_tracker"]


def close_app(app: Flask) -> None:
    """Close the app's container now instead of at interpreter exit."""
    container = get_container(app)
    container.close()
    atexit.unregister(container.close)
