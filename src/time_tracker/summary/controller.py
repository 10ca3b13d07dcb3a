from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.auth import make_token_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service)

    @app.route("/api/reports/summary", methods=["GET"], endpoint="reports_summary")
    @token_required
    def reports_summary():
        return jsonify(container.aggregator.summarize(g.user_id).to_dict())
