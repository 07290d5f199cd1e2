"""Structured Logging — one handler, two renderings of the same advisor log fields.

Invariants:
    - Every line carries timestamp (taken from the record), level, logger, message
    - Advisor fields (record_id, error_code, path, risk_tolerance) are rendered
      whenever a call site passed them through extra=
    - setup_logging may run many times (reloads, repeated lifespans) and still
      leaves exactly one advisor handler on the root logger
    - SQLAlchemy engine and driver loggers never emit below WARNING

Design Decisions:
    - stdlib logging with custom formatters: call sites keep logger.info(..., extra=)
    - "json" for log shippers, "text" (key=value suffix) for terminals and tests
"""

import json
import logging
from datetime import datetime, timezone

ADVISOR_FIELDS: tuple[str, ...] = ("record_id", "error_code", "path", "risk_tolerance")

_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def _advisor_fields(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in ADVISOR_FIELDS
        if record.__dict__.get(key) is not None
    }


def _record_time(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()


class JSONFormatter(logging.Formatter):
    """One JSON object per line, tagged with the service name."""

    def __init__(self, service: str = "coverage-advisor"):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": _record_time(record),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
            **_advisor_fields(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with advisor fields appended as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"{_record_time(record)} {record.levelname} "
            f"{record.name}: {record.getMessage()}"
        )
        fields = _advisor_fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class _AdvisorHandler(logging.StreamHandler):
    """Marker type so setup_logging can find and replace its own handler."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the advisor handler on the root logger, replacing any earlier one."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _AdvisorHandler)]:
        root.removeHandler(existing)

    handler = _AdvisorHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))
    return handler
