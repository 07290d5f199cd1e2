"""Root conftest — shared test configuration and audit sink fakes.

Invariants:
    - Tests never touch a real PostgreSQL instance
    - Fake sinks satisfy the AuditSink protocol structurally (no inheritance)
"""

import asyncio
import os

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from coverage_advisor.core.domain_types import (  # noqa: E402
    ApplicantProfile, AuditRecord, AuditRecordId, RiskTolerance,
)
from coverage_advisor.core.errors import PersistenceError  # noqa: E402


class InMemoryAuditSink:
    """Stores appended records in a list and hands out sequential ids."""

    def __init__(self):
        self.records: list[AuditRecord] = []

    async def append(self, record: AuditRecord) -> AuditRecordId:
        self.records.append(record)
        return AuditRecordId(len(self.records))


class FailingAuditSink:
    """Always fails, like a storage outage."""

    def __init__(self, exc: Exception | None = None):
        self.exc = exc or PersistenceError("connection refused", "append")
        self.calls = 0

    async def append(self, record: AuditRecord) -> AuditRecordId:
        self.calls += 1
        raise self.exc


class HangingAuditSink:
    """Never answers within any reasonable timeout."""

    def __init__(self, delay_seconds: float = 30.0):
        self.delay_seconds = delay_seconds
        self.started = 0

    async def append(self, record: AuditRecord) -> AuditRecordId:
        self.started += 1
        await asyncio.sleep(self.delay_seconds)
        return AuditRecordId(1)


class GatedAuditSink:
    """Holds every append until release is set, then stores the record."""

    def __init__(self):
        self.release = asyncio.Event()
        self.started = 0
        self.records: list[AuditRecord] = []

    async def append(self, record: AuditRecord) -> AuditRecordId:
        self.started += 1
        await self.release.wait()
        self.records.append(record)
        return AuditRecordId(len(self.records))


@pytest.fixture
def memory_sink():
    return InMemoryAuditSink()


@pytest.fixture
def failing_sink():
    return FailingAuditSink()


@pytest.fixture
def hanging_sink():
    return HangingAuditSink()


@pytest.fixture
def gated_sink():
    return GatedAuditSink()


@pytest.fixture
def balanced_profile():
    return ApplicantProfile(
        age=30, annual_income=75_000, dependents=2,
        risk_tolerance=RiskTolerance.MEDIUM,
    )


@pytest.fixture
def make_failing_sink():
    """Factory for sinks that raise a chosen exception."""
    return FailingAuditSink


@pytest.fixture
async def sqlite_manager():
    """DatabaseSessionManager bound to a fresh in-memory SQLite database."""
    from sqlalchemy.ext.asyncio import (
        AsyncSession, async_sessionmaker, create_async_engine,
    )
    from sqlalchemy.pool import StaticPool

    from coverage_advisor.db.base import Base
    from coverage_advisor.infrastructure.database import DatabaseSessionManager
    import coverage_advisor.models.submission  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = engine
    manager._session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    yield manager
    await engine.dispose()
