"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services never import fastapi; routes wire them up
    - Collaborators (storage sinks) arrive through constructors
"""
