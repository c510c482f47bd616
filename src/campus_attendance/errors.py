from __future__ import annotations

import logging

import mysql.connector
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .core.exceptions import ConflictError, DomainError, ValidationError

logger = logging.getLogger(__name__)


def add_error_handlers(app: Flask) -> None:
    """Every error leaves the app as ``{"error": message}`` with a matching status."""

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        body = {"error": str(exc)}
        if isinstance(exc, ConflictError) and exc.conflicts:
            body["conflicts"] = exc.conflicts
        if isinstance(exc, ValidationError) and exc.details:
            body["details"] = exc.details
        return jsonify(body), exc.status_code

    @app.errorhandler(mysql.connector.Error)
    def handle_store_error(exc: mysql.connector.Error):
        logger.error("Database error: %s", exc)
        return jsonify({"error": str(exc)}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500
