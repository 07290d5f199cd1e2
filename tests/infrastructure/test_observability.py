"""Structured Logging — formatter output and idempotent handler setup."""

import json
import logging

import pytest

from coverage_advisor.infrastructure.observability import (
    JSONFormatter, KeyValueFormatter, setup_logging,
)


def _record(msg: str = "Recommendation stored with ID: 7", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "coverage_advisor.services.audit_recorder", logging.INFO,
        __file__, 1, msg, None, None,
    )
    record.__dict__.update(extra)
    return record


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    noisy = {n: logging.getLogger(n).level for n in ("sqlalchemy.engine", "aiosqlite")}
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, noisy_level in noisy.items():
        logging.getLogger(name).setLevel(noisy_level)


def test_json_line_carries_advisor_fields():
    line = JSONFormatter().format(_record(record_id=7, path=None))
    entry = json.loads(line)

    assert entry["level"] == "INFO"
    assert entry["service"] == "coverage-advisor"
    assert entry["logger"] == "coverage_advisor.services.audit_recorder"
    assert entry["message"] == "Recommendation stored with ID: 7"
    assert entry["record_id"] == 7
    assert "path" not in entry


def test_key_value_line_appends_fields():
    line = KeyValueFormatter().format(
        _record("Audit record dropped", error_code="PERSISTENCE_ERROR", risk_tolerance="Low"),
    )
    assert line.endswith(
        "Audit record dropped error_code=PERSISTENCE_ERROR risk_tolerance=Low",
    )


def test_key_value_line_without_fields_is_bare():
    line = KeyValueFormatter().format(_record("started"))
    assert line.endswith("coverage_advisor.services.audit_recorder: started")


def test_setup_twice_keeps_one_handler(restore_root_logging):
    root = restore_root_logging
    before = len(root.handlers)

    setup_logging("INFO", "json")
    handler = setup_logging("DEBUG", "text")

    assert len(root.handlers) == before + 1
    assert handler in root.handlers
    assert isinstance(handler.formatter, KeyValueFormatter)
    assert root.level == logging.DEBUG


@pytest.mark.parametrize("level,engine_level", [
    ("INFO", logging.WARNING),
    ("ERROR", logging.ERROR),
])
def test_sqlalchemy_engine_is_quieted(restore_root_logging, level, engine_level):
    setup_logging(level, "json")
    assert logging.getLogger("sqlalchemy.engine").level == engine_level
