from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(StorageError)
    def handle_storage_error(e: StorageError):
        app.logger.exception("Storage failure on %s %s", request.method, request.path)
        return error_response("Internal server error", 500)

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return error_response(str(e), status)
        app.logger.exception("Unhandled domain error on %s %s", request.method, request.path)
        return error_response("Internal server error", 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        if e.code == 404 and request.path.startswith("/api/"):
            return error_response("API route not found", 404)
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Internal server error", 500)
