"""
Logging configuration.

Every validation run gets a run id stored in a ContextVar so that log lines
emitted by the encoder, solver and audits of one run can be correlated, also
when several runs execute concurrently.
"""

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Iterator
from uuid import uuid4

from compliance_engine.core.config import Settings, get_settings

_run_id_var: ContextVar[str] = ContextVar("run_id", default="")


def get_run_id() -> str:
    """Get the current validation run id from context."""
    return _run_id_var.get()


@contextmanager
def run_context(run_id: str | None = None) -> Iterator[str]:
    """Bind a run id for the duration of a validation run."""
    value = run_id or uuid4().hex
    token = _run_id_var.set(value)
    try:
        yield value
    finally:
        _run_id_var.reset(token)


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "run_id": get_run_id(),
        }

        if hasattr(record, "duration_ms"):
            log_entry["duration_ms"] = record.duration_ms

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """Install a single stream handler on the package logger."""
    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    logger = logging.getLogger("compliance_engine")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def setup_logging(settings: Settings | None = None) -> None:
    """Configure package logging from settings."""
    settings = settings or get_settings()
    level = "DEBUG" if settings.debug else settings.log_level
    configure_logging(level, json_output=settings.log_json)
