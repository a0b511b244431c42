"""Platform-wide admin report."""

import logging

from ticket_reports.config import Settings
from ticket_reports.database import SessionFactory, ping
from ticket_reports.schemas.report import AdminReport
from ticket_reports.services.access import GLOBAL_SCOPE
from ticket_reports.services.activity import ActivityFeed, merge_activity
from ticket_reports.services.aggregates import AggregateCollector
from ticket_reports.services.fanout import fan_out

logger = logging.getLogger(__name__)


class AdminReportService:
    """Builds the admin report.

    All queries are independent of each other and run concurrently. The
    four headline counts tolerate failures and fall back to 0; every
    other query failure aborts the report.
    """

    def __init__(self, session_factory: SessionFactory, settings: Settings):
        self.session_factory = session_factory
        self.settings = settings
        self.aggregates = AggregateCollector(session_factory)
        self.activity = ActivityFeed(session_factory)

    async def build(self, organizer_id: str | None = None) -> AdminReport:
        """
        Build the admin report.

        Args:
            organizer_id: Restricts the recent-events feed to one organizer.
                Headline totals stay global.

        Returns:
            Assembled report
        """
        await ping(self.session_factory)

        aggregates = self.aggregates
        feed_limit = self.settings.ADMIN_FEED_SOURCE_LIMIT
        months = self.settings.EVENT_TREND_MONTHS

        (
            total_users,
            total_events,
            total_reservations,
            total_tickets,
            total_revenue,
            users_by_role,
            events_by_month,
            events_per_month,
            recent_users,
            recent_events,
            recent_reservations,
            recent_payments,
        ) = await fan_out(
            aggregates.count_or_zero("users", aggregates.count_users),
            aggregates.count_or_zero(
                "events", lambda: aggregates.count_events(GLOBAL_SCOPE)
            ),
            aggregates.count_or_zero("reservations", aggregates.count_reservations),
            aggregates.count_or_zero(
                "tickets", lambda: aggregates.count_tickets(GLOBAL_SCOPE)
            ),
            aggregates.sum_revenue(GLOBAL_SCOPE),
            aggregates.users_by_role(),
            aggregates.events_by_month(months),
            aggregates.events_per_month(months),
            self.activity.recent_users(feed_limit),
            self.activity.recent_events(feed_limit, organizer_id=organizer_id),
            self.activity.recent_reservations(GLOBAL_SCOPE, feed_limit),
            self.activity.recent_payments(feed_limit),
        )

        recent_activity = merge_activity(
            [recent_users, recent_events, recent_reservations, recent_payments],
            limit=self.settings.RECENT_ACTIVITY_LIMIT,
        )
        logger.info(
            f"Admin report built: {total_events} events, {total_users} users, "
            f"{len(recent_activity)} activity entries"
        )

        return AdminReport(
            total_users=total_users,
            total_events=total_events,
            total_reservations=total_reservations,
            total_tickets=total_tickets,
            total_revenue=float(total_revenue),
            recent_activity=recent_activity,
            users_by_role=users_by_role,
            events_by_month=events_by_month,
            events_per_month=events_per_month,
        )
