"""Database Infrastructure — SQLAlchemy declarative base and session factory.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL (native async, no thread pool overhead)
"""
