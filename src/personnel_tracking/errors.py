from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .core.exceptions import DomainError

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Beklenmeyen bir hata oluştu"


def register_error_handlers(app: Flask) -> None:
    """Every error leaves the API as `{"message": ...}` with a fitting status code."""

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        if exc.status_code >= 500:
            logger.error("%s: %s", type(exc).__name__, exc)
        return jsonify({"message": str(exc)}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"message": exc.description or exc.name}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        logger.exception("Unhandled error")
        return jsonify({"message": INTERNAL_ERROR}), 500
