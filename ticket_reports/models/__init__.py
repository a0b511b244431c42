"""SQLAlchemy models."""

from ticket_reports.models.base import Base
from ticket_reports.models.event import Event
from ticket_reports.models.payment import Payment, PaymentStatus
from ticket_reports.models.reservation import Reservation
from ticket_reports.models.ticket import Ticket
from ticket_reports.models.user import Role, User

__all__ = [
    "Base",
    "User",
    "Role",
    "Event",
    "Ticket",
    "Reservation",
    "Payment",
    "PaymentStatus",
]
