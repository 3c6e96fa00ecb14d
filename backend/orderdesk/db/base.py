"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - Relationships are awaitable via `entity.awaitable_attrs.<name>` (AsyncAttrs)

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - AsyncAttrs mixin: lazy relations can be resolved without implicit IO
"""

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase


class Base(AsyncAttrs, DeclarativeBase):
    """Base class for all OrderDesk ORM models."""
    pass
