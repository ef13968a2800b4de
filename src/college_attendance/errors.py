from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    PersistenceError,
    UpsertConflictError,
    ValidationError,
)

# First match wins; NotAuthenticatedError and ProfileLoadError are covered by their bases.
_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (UpsertConflictError, 409),
    (ValidationError, 400),
    (PersistenceError, 503),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def _error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if status >= 500:
            app.logger.error("Request failed: %s", e, exc_info=e)
        return _error(str(e), status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return _error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        app.logger.exception("Unhandled error")
        if app.config.get("DEBUG"):
            return _error(f"Internal error: {e}", 500)
        return _error("Internal server error", 500)
