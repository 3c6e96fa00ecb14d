"""User ORM — an account within a tenant.

Invariants:
    - email is unique and non-nullable
    - password_hash is stored here but NEVER declared on any output shape
    - role_id is nullable: users may exist before a role is assigned

Design Decisions:
    - role relationship uses the default lazy="select": list queries eager-load it
      explicitly (selectinload) so async sessions never lazy-load implicitly
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderdesk.db.base import Base


class User(Base):
    """User entity."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("roles.id"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    role: Mapped["Role"] = relationship("Role", back_populates="users")
    invoices: Mapped[list["OrderInvoice"]] = relationship(
        "OrderInvoice", back_populates="customer",
    )
