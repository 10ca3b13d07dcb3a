from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.auth import make_token_required
from ..common.datetime_utils import now_local
from ..container import Container
from ..core.constants import DEFAULT_RECENT_ENTRIES
from .dashboard import build_dashboard_view, render_dashboard


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service)

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @token_required
    def dashboard():
        now = now_local()
        view = build_dashboard_view(
            entries=container.ledger.list(g.user_id, limit=DEFAULT_RECENT_ENTRIES),
            summary=container.aggregator.summarize(g.user_id, now=now),
            now=now,
            open_entry=container.ledger.find_open(g.user_id),
        )
        return jsonify(render_dashboard(view))
