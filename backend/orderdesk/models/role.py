"""Role ORM — named permission level assigned to users.

Invariants:
    - name is unique and matches a core.domain_types.Role value
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderdesk.db.base import Base


class Role(Base):
    """Role entity — one row per Role enum value."""
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    users: Mapped[list["User"]] = relationship("User", back_populates="role")
