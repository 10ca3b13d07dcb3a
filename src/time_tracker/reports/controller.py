from __future__ import annotations

import io

from flask import Flask, g, jsonify, request, send_file

from ..common.auth import make_token_required
from ..container import Container

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service)

    @app.route("/api/reports/range", methods=["GET"], endpoint="reports_range")
    @token_required
    def reports_range():
        period = request.args.get("period", "weekly")
        report = container.report_service.range_report(g.user_id, period)
        return jsonify(report.to_dict())

    @app.route("/api/reports/weekly-export", methods=["GET"], endpoint="reports_weekly_export")
    @token_required
    def reports_weekly_export():
        export = container.report_service.weekly_export(g.user_id)
        app.logger.info("Weekly report exported for user %s: %s", g.user_id, export.filename)
        return send_file(
            io.BytesIO(export.content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=export.filename,
        )
