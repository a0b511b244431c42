"""Report schemas."""

from ticket_reports.models.user import Role
from ticket_reports.schemas.activity import ActivityItem
from ticket_reports.schemas.common import BaseSchema, UtcDateTime


class RoleCount(BaseSchema):
    """Number of users holding a role."""

    role: Role
    count: int


class MonthCount(BaseSchema):
    """Number of events created in a calendar month (``YYYY-MM``)."""

    month: str
    count: int


class AdminReport(BaseSchema):
    """Platform-wide statistics."""

    total_users: int = 0
    total_events: int = 0
    total_reservations: int = 0
    total_tickets: int = 0
    total_revenue: float = 0
    recent_activity: list[ActivityItem] = []
    users_by_role: list[RoleCount] = []
    events_by_month: int = 0
    events_per_month: list[MonthCount] = []


class OrganizerInfo(BaseSchema):
    """Organizer contact shown next to an event."""

    name: str | None
    email: str


class EventPerformance(BaseSchema):
    """Ticket and revenue figures for one event."""

    id: str
    title: str
    date: UtcDateTime
    total_tickets: int
    sold_tickets: int
    revenue: float
    conversion_rate: float


class OrganizerEvent(BaseSchema):
    """Event listed in the organizer report."""

    id: str
    title: str
    description: str | None
    date: UtcDateTime
    created_at: UtcDateTime
    organizer: OrganizerInfo


class OrganizerReport(BaseSchema):
    """Statistics for the events in an organizer's scope."""

    total_events: int = 0
    total_tickets: int = 0
    total_reservations: int = 0
    total_revenue: float = 0
    recent_activity: list[ActivityItem] = []
    event_performance: list[EventPerformance] = []
    events: list[OrganizerEvent] = []
