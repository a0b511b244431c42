"""Reservation model."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ticket_reports.models.base import Base

if TYPE_CHECKING:
    from ticket_reports.models.payment import Payment
    from ticket_reports.models.ticket import Ticket
    from ticket_reports.models.user import User


class Reservation(Base):
    """Reservation made by a user, holding one or more tickets."""

    __tablename__ = "reservations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="reservations")
    tickets: Mapped[list["Ticket"]] = relationship(
        "Ticket", back_populates="reservation"
    )
    payments: Mapped[list["Payment"]] = relationship(
        "Payment", back_populates="reservation"
    )

    __table_args__ = (
        Index("idx_reservations_user_id", "user_id"),
        Index("idx_reservations_created_at", "created_at"),
    )
