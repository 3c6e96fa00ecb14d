"""Services Layer — async orchestration around the pure core.

Invariants:
    - Services receive their collaborators (sessions, caches, page sources) as arguments
    - IO happens here or in infrastructure/, never in core/
"""
