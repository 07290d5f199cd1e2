"""Infrastructure Layer — storage adapters and cross-cutting concerns.

Invariants:
    - Infrastructure never imports core/ logic, only core/ types, errors and protocols
    - All storage failures mapped to PersistenceError

Design Decisions:
    - Thin adapters over raw clients: the audit recorder never touches SQLAlchemy
"""
