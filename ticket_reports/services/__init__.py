"""Services package."""

from ticket_reports.services.activity import ActivityFeed, merge_activity
from ticket_reports.services.admin_report import AdminReportService
from ticket_reports.services.aggregates import AggregateCollector
from ticket_reports.services.organizer_report import OrganizerReportService

__all__ = [
    "ActivityFeed",
    "AggregateCollector",
    "AdminReportService",
    "OrganizerReportService",
    "merge_activity",
]
