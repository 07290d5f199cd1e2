"""Submission ORM — append-only audit row pairing an applicant profile with its recommendation.

Invariants:
    - id is an autoincrement integer assigned by the database
    - submitted_at is assigned by the server, never by the caller
    - Rows are inserted once and never updated or deleted by this service

Design Decisions:
    - Numeric coverage_amount/term_years instead of the formatted display strings:
      analytics can aggregate without parsing "$1,250,000"
    - Table name kept as "submissions" so existing dashboards keep working
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from coverage_advisor.db.base import Base


class Submission(Base):
    """One accepted recommendation request."""
    __tablename__ = "submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    income: Mapped[int] = mapped_column(Integer, nullable=False)
    dependents: Mapped[int] = mapped_column(Integer, nullable=False)
    risk_tolerance: Mapped[str] = mapped_column(String(10), nullable=False)
    recommendation_type: Mapped[str] = mapped_column(String(20), nullable=False)
    coverage_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    term_years: Mapped[int] = mapped_column(Integer, nullable=False)
    explanation: Mapped[str] = mapped_column(Text, nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
