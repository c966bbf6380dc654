from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def api_response(data: Any = None, message: str = "Success", status: int = 200):
    """JSON envelope shared by every route."""
    return jsonify({
        "success": status < 400,
        "message": message,
        "data": data,
        "errors": [],
    }), status


def api_error(message: str, status: int, errors: Optional[list] = None):
    return jsonify({
        "success": False,
        "message": message,
        "data": None,
        "errors": list(errors or []),
    }), status


def json_body(request) -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 500:
            logger.error("%s: %s", type(e).__name__, e.message)
        return api_error(e.message, e.status_code, e.errors)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return api_error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return api_error("Internal server error", 500)
