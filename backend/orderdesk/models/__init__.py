"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from orderdesk.models.role import Role  # noqa: F401
from orderdesk.models.user import User  # noqa: F401
from orderdesk.models.order_invoice import OrderInvoice  # noqa: F401
