"""Structured stdout logging with a per-request id for the calculator API."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class SimpleStructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
        return (
            f"{ts} level={record.levelname} logger={record.name} "
            f"request_id={getattr(record, 'request_id', '-')} msg={record.getMessage()}"
        )


def setup_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Replace handlers so repeated create_app() calls (tests, reloader) don't duplicate lines
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(lvl)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(SimpleStructuredFormatter())
    root.addHandler(handler)


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
