"""Initial schema — submissions audit table.

Revision ID: 001_submissions
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_submissions"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "submissions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("age", sa.Integer, nullable=False),
        sa.Column("income", sa.Integer, nullable=False),
        sa.Column("dependents", sa.Integer, nullable=False),
        sa.Column("risk_tolerance", sa.String(10), nullable=False),
        sa.Column("recommendation_type", sa.String(20), nullable=False),
        sa.Column("coverage_amount", sa.BigInteger, nullable=False),
        sa.Column("term_years", sa.Integer, nullable=False),
        sa.Column("explanation", sa.Text, nullable=False),
        sa.Column(
            "submitted_at", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "ix_submissions_submitted_at", "submissions", ["submitted_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_submissions_submitted_at", table_name="submissions")
    op.drop_table("submissions")
