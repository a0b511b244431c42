"""Ticket model."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ticket_reports.models.base import Base

if TYPE_CHECKING:
    from ticket_reports.models.event import Event
    from ticket_reports.models.reservation import Reservation


class Ticket(Base):
    """Ticket for an event, optionally held by a reservation."""

    __tablename__ = "tickets"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("events.id"), nullable=False
    )
    reservation_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("reservations.id")
    )

    # Relationships
    event: Mapped["Event"] = relationship("Event", back_populates="tickets")
    reservation: Mapped["Reservation | None"] = relationship(
        "Reservation", back_populates="tickets"
    )

    __table_args__ = (
        Index("idx_tickets_event_id", "event_id"),
        Index("idx_tickets_reservation_id", "reservation_id"),
    )
