"""
Structured JSON logging configuration.

Replaces the default text formatter with one JSON object per line so that
every log line includes: timestamp, level, logger, message, request_id, and
the actor/action/agreement_id of authorization decisions when present.
"""

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from uuid import uuid4

# Context variable for the current request ID
_request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_DECISION_FIELDS = ("actor", "action", "agreement_id")


def get_request_id() -> str:
    """Get the current request ID from context."""
    return _request_id_var.get()


@contextmanager
def request_id_scope(request_id: str | None = None):
    """Tag every log line emitted inside the block with a request ID."""
    token = _request_id_var.set(request_id or uuid4().hex)
    try:
        yield _request_id_var.get()
    finally:
        _request_id_var.reset(token)


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": get_request_id(),
        }

        # Include decision fields if attached to the record
        for name in _DECISION_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)

        # Include exception info
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Replace the root logger's handlers with one JSON (or plain text) handler."""
    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        ))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def configure_from_settings() -> None:
    from rentflow.config import settings

    configure_logging(settings.log_level, settings.log_format)
