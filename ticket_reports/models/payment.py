"""Payment model."""

import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ticket_reports.models.base import Base, enum_values

if TYPE_CHECKING:
    from ticket_reports.models.reservation import Reservation


class PaymentStatus(str, enum.Enum):
    """Payment status enum."""

    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"
    REFUNDED = "Refunded"


class Payment(Base):
    """Payment made against a reservation."""

    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    reservation_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("reservations.id"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, values_callable=enum_values, native_enum=False, length=20),
        default=PaymentStatus.PENDING,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    # Relationships
    reservation: Mapped["Reservation"] = relationship(
        "Reservation", back_populates="payments"
    )

    __table_args__ = (
        Index("idx_payments_reservation_id", "reservation_id"),
        Index("idx_payments_status_created_at", "status", "created_at"),
    )
