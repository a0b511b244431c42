"""Pydantic schemas for API responses."""

from ticket_reports.schemas.activity import ActivityItem, ActivityType
from ticket_reports.schemas.common import DataResponse, ErrorResponse
from ticket_reports.schemas.report import (
    AdminReport,
    EventPerformance,
    MonthCount,
    OrganizerEvent,
    OrganizerInfo,
    OrganizerReport,
    RoleCount,
)

__all__ = [
    "ActivityItem",
    "ActivityType",
    "DataResponse",
    "ErrorResponse",
    "AdminReport",
    "EventPerformance",
    "MonthCount",
    "OrganizerEvent",
    "OrganizerInfo",
    "OrganizerReport",
    "RoleCount",
]
