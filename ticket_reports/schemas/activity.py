"""Activity feed schemas."""

from enum import Enum

from ticket_reports.schemas.common import BaseSchema, UtcDateTime


class ActivityType(str, Enum):
    """Activity feed entry type."""

    USER_REGISTERED = "user_registered"
    EVENT_CREATED = "event_created"
    RESERVATION_MADE = "reservation_made"
    PAYMENT_COMPLETED = "payment_completed"


class ActivityItem(BaseSchema):
    """Single entry of the recent activity feed."""

    id: str
    type: ActivityType
    description: str
    timestamp: UtcDateTime
