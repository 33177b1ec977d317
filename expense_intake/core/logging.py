"""Logging setup and per-request context.

Records are stamped with the current request id and rendered either as one
JSON object per line or as plain text. Structured values passed through
``extra=`` (see ``CONTEXT_FIELDS``) are carried into the JSON output.
"""

import json
import logging
import logging.config
import time
import uuid
from contextvars import ContextVar
from typing import Any, Dict

REQUEST_ID_HEADER = "X-Request-ID"
CONTEXT_FIELDS = ("method", "path", "status", "duration_ms", "expense_id")

current_request_id: ContextVar[str] = ContextVar("current_request_id", default="-")


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id.get()
        return True


class JsonLineFormatter(logging.Formatter):
    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", "-"),
            "message": record.getMessage(),
        }
        entry.update(
            (field, getattr(record, field))
            for field in CONTEXT_FIELDS
            if hasattr(record, field)
        )
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def logging_config(debug: bool = False, json_logs: bool = True) -> dict:
    level = "DEBUG" if debug else "INFO"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_context": {"()": RequestContextFilter}},
        "formatters": {
            "json": {"()": JsonLineFormatter},
            "text": {
                "format": "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s",
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "json" if json_logs else "text",
                "filters": ["request_context"],
                "level": level,
            },
        },
        "loggers": {
            # uvicorn installs its own handlers; route them through ours
            "uvicorn": {"handlers": ["stdout"], "level": "INFO", "propagate": False},
            "uvicorn.access": {"handlers": [], "level": "WARNING", "propagate": True},
        },
        "root": {"handlers": ["stdout"], "level": level},
    }


def init_logging(debug: bool = False, json_logs: bool = True) -> None:
    logging.config.dictConfig(logging_config(debug=debug, json_logs=json_logs))


async def request_context_middleware(request, call_next):  # type: ignore
    """Bind a request id for the duration of the request and log its outcome."""
    rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    token = current_request_id.set(rid)
    started = time.perf_counter()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        response.headers[REQUEST_ID_HEADER] = rid
        return response
    finally:
        logging.getLogger("expense_intake.request").info(
            "request handled",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        current_request_id.reset(token)
