"""Listing Schemas — output shapes for the paginated list endpoints.

Invariants:
    - Every shape subclasses Projection: declared fields ARE the allow-list
    - No shape declares password_hash or internal_notes
    - Relation fields (role, customer) default to None and are only set when resolved

Design Decisions:
    - validation_alias maps a DTO field to a differently-named source column
      (customer_id <- user_id); serialization keeps the DTO name
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from orderdesk.core.domain_types import InvoiceId, RoleId, UserId
from orderdesk.core.projection import Projection

DTO = TypeVar("DTO", bound=BaseModel)


class RoleDto(Projection):
    """Public role data."""
    id: RoleId
    name: str
    description: str | None = None


class UserSummary(Projection):
    """Minimal user data embedded in other resources."""
    id: UserId
    email: str
    name: str


class UserDto(Projection):
    """Public user data with the assigned role attached when present."""
    id: UserId
    email: str
    name: str
    role_id: RoleId | None = None
    created_at: datetime
    role: RoleDto | None = None


class OrderInvoiceDto(Projection):
    """Public invoice data with the customer attached when present."""
    id: InvoiceId
    number: str
    status: str
    total_cents: int
    currency: str
    customer_id: UserId = Field(validation_alias="user_id")
    issued_at: datetime
    customer: UserSummary | None = None


class PageResponse(BaseModel, Generic[DTO]):
    """One page of projected results plus the unpaginated match count."""
    payloads: list[DTO]
    total: int
    page: int
    limit: int
