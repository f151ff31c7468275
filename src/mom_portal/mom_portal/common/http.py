from __future__ import annotations

import time
from typing import Any, Callable, Optional

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..app_logger import get_logger
from ..core.exceptions import DomainError, ValidationError
from .pagination import Page

log = get_logger("http")


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200, **extra: Any):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    body.update(extra)
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def paged(page: Page, serialize: Callable[[Any], dict]):
    return ok(
        [serialize(item) for item in page.items],
        count=len(page.items),
        total=page.total,
        totalPages=page.total_pages,
        currentPage=page.page,
    )


def fail(message: str, status: int, *, error: Optional[str] = None):
    body: dict[str, Any] = {"success": False, "message": message}
    if error:
        body["error"] = error
    return jsonify(body), status


def json_body() -> dict:
    """Request JSON object; empty dict for an empty body."""
    if not request.get_data(cache=True):
        return {}
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        if e.code == 404:
            return fail("Route not found", 404)
        if e.code == 413:
            limit_mb = int(app.config.get("MAX_CONTENT_LENGTH") or 0) // (1024 * 1024)
            return fail(f"File too large. Maximum size is {limit_mb}MB", 413)
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        log.exception("Unhandled error on %s %s", request.method, request.path)
        detail = str(e) if app.config.get("DEBUG") else None
        return fail("Internal Server Error", 500, error=detail)


def register_request_logging(app: Flask) -> None:
    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        log.info("%s %s -> %s (%.1fms)", request.method, request.path, response.status_code, elapsed_ms)
        return response
