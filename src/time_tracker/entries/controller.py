from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.auth import make_token_required
from ..common.http import json_body
from ..common.datetime_utils import parse_instant
from ..common.validators import optional_notes
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service)
    ledger = container.ledger

    @app.route("/api/time-entries", methods=["POST"], endpoint="create_entry")
    @token_required
    def create_entry():
        """Check in, or backfill a manual entry when a check-out is supplied."""
        data = json_body()
        if not data.get("checkIn"):
            raise ValidationError("Check-in time and date are required")

        check_in = parse_instant(data["checkIn"])
        notes = optional_notes(data.get("notes"))

        if data.get("checkOut") or data.get("isManualEntry"):
            check_out = parse_instant(data["checkOut"]) if data.get("checkOut") else None
            entry_id = ledger.create_manual(g.user_id, check_in, check_out, data.get("date") or None, notes)
        else:
            entry_id = ledger.open(g.user_id, check_in, notes)

        return jsonify({"message": "Time entry created", "entryId": entry_id}), 201

    @app.route("/api/time-entries/<int:entry_id>", methods=["PUT"], endpoint="close_entry")
    @token_required
    def close_entry(entry_id: int):
        data = json_body()
        if not data.get("checkOut"):
            raise ValidationError("Check-out time required")

        hours = ledger.close(
            g.user_id,
            entry_id,
            parse_instant(data["checkOut"]),
            optional_notes(data.get("notes")),
        )
        return jsonify({"message": "Time entry updated successfully", "hours": hours})

    @app.route("/api/time-entries", methods=["GET"], endpoint="list_entries")
    @token_required
    def list_entries():
        entries = ledger.list(
            g.user_id,
            date_from=request.args.get("startDate") or None,
            date_to=request.args.get("endDate") or None,
            limit=request.args.get("limit"),
        )
        return jsonify([e.to_dict() for e in entries])

    @app.route("/api/time-entries/<int:entry_id>", methods=["DELETE"], endpoint="delete_entry")
    @token_required
    def delete_entry(entry_id: int):
        ledger.delete(g.user_id, entry_id)
        return jsonify({"message": "Deleted successfully"})
