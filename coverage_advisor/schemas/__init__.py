"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas describe the wire format; core/ dataclasses stay transport-free

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
