from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any, Dict

from flask import Flask, current_app, g, request

# Record attributes copied into the JSON payload when a caller passes them via ``extra``.
_EXTRA_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "container",
    "container_id",
    "action",
    "state",
)


class JsonRequestFormatter(logging.Formatter):
    """Render log records as JSON lines with request metadata when available."""

    default_time_format = "%Y-%m-%dT%H:%M:%S"
    default_msec_format = "%s.%03dZ"

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - base class contract
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.default_time_format),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = getattr(record, "request_id", None)
        if request_id is None:
            request_id = current_request_id()
        if request_id:
            payload["request_id"] = request_id

        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_root_logging(level: str = "INFO") -> logging.Handler:
    """Attach the JSON handler to the root logger if nothing else has."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonRequestFormatter())

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def init_logging(app: Flask, level: str = "INFO") -> None:
    """Configure JSON logging and request ID middleware for the Flask app."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonRequestFormatter())

    # Reset Flask's default handlers to avoid duplicate logs.
    app.logger.handlers.clear()
    app.logger.addHandler(handler)
    app.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    app.logger.propagate = False

    configure_root_logging(level)

    app.before_request(_begin_request)
    app.after_request(_finish_request)


def current_request_id() -> str | None:
    """Return the request ID for the active request context if present."""

    try:
        return getattr(g, "request_id", None)
    except RuntimeError:
        return None


REQUEST_ID_HEADER = "X-Request-ID"


def _begin_request() -> None:
    g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    g.request_clock = time.perf_counter()


def _finish_request(response):
    request_id = current_request_id()
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id

    clock = g.get("request_clock")
    elapsed_ms = None if clock is None else round((time.perf_counter() - clock) * 1000, 2)

    current_app.logger.info(
        "request complete",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "duration_ms": elapsed_ms,
        },
    )
    return response
