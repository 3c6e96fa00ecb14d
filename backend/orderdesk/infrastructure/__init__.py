"""Infrastructure Layer — database, cache, logging and startup wiring.

Invariants:
    - Every external client is created on startup (lifespan), never at import
    - Library exceptions are mapped to core.errors before leaving this layer
"""
