"""Event model."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ticket_reports.models.base import Base

if TYPE_CHECKING:
    from ticket_reports.models.ticket import Ticket
    from ticket_reports.models.user import User


class Event(Base):
    """Event owned by an organizer."""

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    organizer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    # Relationships
    organizer: Mapped["User"] = relationship("User", back_populates="events")
    tickets: Mapped[list["Ticket"]] = relationship("Ticket", back_populates="event")

    __table_args__ = (
        Index("idx_events_organizer_id", "organizer_id"),
        Index("idx_events_created_at", "created_at"),
    )
