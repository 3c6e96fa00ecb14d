"""OrderInvoice ORM — invoice issued for a customer's order.

Invariants:
    - number is unique and non-nullable
    - status is an InvoiceStatus value (draft -> issued -> paid | void)
    - total_cents is an integer amount in minor units (no float money)
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderdesk.db.base import Base


class OrderInvoice(Base):
    """Invoice entity — belongs to a customer (User)."""
    __tablename__ = "order_invoices"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft",
    )
    total_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    internal_notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    customer: Mapped["User"] = relationship("User", back_populates="invoices")
