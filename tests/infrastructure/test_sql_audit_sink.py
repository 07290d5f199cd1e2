"""SQL Audit Sink — inserts into the submissions table via the session manager.

Invariants:
    - append() returns the autoincrement id of the inserted row
    - stored columns mirror the AuditRecord fields; submitted_at assigned server-side
    - storage failures surface as PersistenceError, never raw SQLAlchemy errors
"""

import pytest
from sqlalchemy import select, text

from coverage_advisor.core.domain_types import AuditRecord
from coverage_advisor.core.errors import PersistenceError
from coverage_advisor.core.recommend import recommend
from coverage_advisor.infrastructure.audit_sink import SqlAuditSink
from coverage_advisor.models.submission import Submission


def _record(profile) -> AuditRecord:
    return AuditRecord.from_pair(profile, recommend(profile))


async def test_append_inserts_row_and_returns_id(sqlite_manager, balanced_profile):
    sink = SqlAuditSink(sqlite_manager)

    first = await sink.append(_record(balanced_profile))
    second = await sink.append(_record(balanced_profile))

    assert (first, second) == (1, 2)
    async with sqlite_manager.session() as db:
        rows = (await db.execute(select(Submission).order_by(Submission.id))).scalars().all()
    assert len(rows) == 2
    row = rows[0]
    assert row.age == 30
    assert row.income == 75_000
    assert row.dependents == 2
    assert row.risk_tolerance == "Medium"
    assert row.recommendation_type == "TermLife"
    assert row.coverage_amount == 1_250_000
    assert row.term_years == 20
    assert row.explanation == "Balanced profile: standard coverage and term."
    assert row.submitted_at is not None


async def test_missing_manager_raises_persistence_error(balanced_profile):
    with pytest.raises(PersistenceError) as exc_info:
        await SqlAuditSink(None).append(_record(balanced_profile))
    assert exc_info.value.operation == "append"


async def test_database_failure_maps_to_persistence_error(
    sqlite_manager, balanced_profile,
):
    async with sqlite_manager.engine.begin() as conn:
        await conn.execute(text("DROP TABLE submissions"))

    with pytest.raises(PersistenceError):
        await SqlAuditSink(sqlite_manager).append(_record(balanced_profile))


async def test_health_check_reports_connectivity(sqlite_manager):
    assert await sqlite_manager.health_check() is True
