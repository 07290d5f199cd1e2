"""SQL Audit Sink — appends AuditRecords to the submissions table.

Invariants:
    - One insert + commit per append; the session is released on every exit path
    - Returns the database-assigned id
    - Every failure surfaces as PersistenceError (never a raw SQLAlchemy error)

Design Decisions:
    - DatabaseSessionManager injected through the constructor: tests pass a manager
      bound to in-memory SQLite, production passes the lifespan singleton
    - A missing manager (startup not run, or shutting down) is a PersistenceError,
      not a RuntimeError: the recorder treats it like any other storage outage
"""

import logging

from coverage_advisor.core.domain_types import AuditRecord, AuditRecordId
from coverage_advisor.core.errors import PersistenceError
from coverage_advisor.infrastructure.database import DatabaseSessionManager
from coverage_advisor.models.submission import Submission

logger = logging.getLogger(__name__)


def _to_row(record: AuditRecord) -> Submission:
    return Submission(
        age=record.age,
        income=record.annual_income,
        dependents=record.dependents,
        risk_tolerance=record.risk_tolerance,
        recommendation_type=record.policy_type,
        coverage_amount=record.coverage_amount,
        term_years=record.term_years,
        explanation=record.explanation,
    )


class SqlAuditSink:
    """AuditSink backed by the shared SQLAlchemy connection pool."""

    def __init__(self, manager: DatabaseSessionManager | None):
        self._manager = manager

    async def append(self, record: AuditRecord) -> AuditRecordId:
        if self._manager is None:
            raise PersistenceError("database not initialized", "append")
        async with self._manager.session() as db:
            row = _to_row(record)
            db.add(row)
            await db.commit()
            return AuditRecordId(row.id)
