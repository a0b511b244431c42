"""User model."""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ticket_reports.models.base import Base, enum_values

if TYPE_CHECKING:
    from ticket_reports.models.event import Event
    from ticket_reports.models.reservation import Reservation


class Role(str, enum.Enum):
    """User role enum."""

    ADMIN = "Admin"
    ORGANIZER = "Organizer"
    USER = "User"


class User(Base):
    """Platform user."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, values_callable=enum_values, native_enum=False, length=20),
        default=Role.USER,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    # Relationships
    events: Mapped[list["Event"]] = relationship("Event", back_populates="organizer")
    reservations: Mapped[list["Reservation"]] = relationship(
        "Reservation", back_populates="user"
    )

    __table_args__ = (
        Index("idx_users_role", "role"),
        Index("idx_users_created_at", "created_at"),
    )
