"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, RoleId, InvoiceId wrap ints for ids in request context, filters, errors
      and DTOs; ORM columns stay plain int (persistence layer)
    - CacheKeyTemplate is a CLOSED set: callers never pass free-form cache keys
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, accept raw values from query strings
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
RoleId = NewType("RoleId", int)
InvoiceId = NewType("InvoiceId", int)


# ─── Enums ───────────────────────────────────────────────────────

class SortOrder(str, Enum):
    """Sort direction for ordering and in-memory comparison."""
    ASC = "asc"
    DESC = "desc"


class Role(str, Enum):
    """Role names carried in token payloads and stored on Role rows."""
    GLOBAL_ADMIN = "global_admin"
    ADMIN = "admin"
    USER = "user"


class CacheKeyTemplate(str, Enum):
    """Named cache domains. One per cacheable list query."""
    ORDER_INVOICE_GET_LIST = "order:invoice:get:list"
    ROLE_GET_LIST = "role:get:list"
    USER_GET_LIST = "user:get:list"


class InvoiceStatus(str, Enum):
    """Invoice lifecycle states — maps to DB `status` column."""
    DRAFT = "draft"
    ISSUED = "issued"
    PAID = "paid"
    VOID = "void"
