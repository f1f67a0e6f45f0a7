"""JSON logs on stdout, tagged with the request id of the current request."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
_INBOUND_ID_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_FIELDS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "request_id",
    "taskName",
}

log = logging.getLogger(__name__)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        entry.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_FIELDS
        )
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def ensure_request_id() -> str:
    """
    Request id for the active request.

    Taken from ``X-Request-ID`` or ``X-Correlation-ID`` when the caller sent
    one, otherwise generated, and cached on ``g``. Outside a request a fresh
    id is returned each call.
    """
    if not has_request_context():
        return str(uuid4())
    cached = g.get("request_id")
    if cached:
        return cached
    inbound = next(filter(None, (request.headers.get(h) for h in _INBOUND_ID_HEADERS)), None)
    g.request_id = inbound or str(uuid4())
    return g.request_id


def configure_logging(level: str | int = "INFO") -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Echo the request id on every response and log one line per request."""
    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _tag_request() -> None:
        ensure_request_id()

    @app.after_request
    def _access_log(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        user = g.get("current_user")
        log.info(
            "request.completed",
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "user_id": getattr(user, "id", None),
            },
        )
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id"]
