"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON responses

Design Decisions:
    - Thin routes delegate to core functions and services
"""
