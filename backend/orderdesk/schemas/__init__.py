"""Pydantic Schemas — response shapes for API endpoints.

Invariants:
    - Schemas validate at system boundary (API responses)
    - Output shapes double as projection allow-lists (core/projection.py)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
