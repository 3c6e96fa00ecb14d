"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (async only in Protocol signatures)

Design Decisions:
    - Functional core separated from imperative shell
"""
