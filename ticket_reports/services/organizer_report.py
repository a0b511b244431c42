"""Per-organizer report."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ticket_reports.config import Settings
from ticket_reports.database import SessionFactory, ping
from ticket_reports.models.event import Event
from ticket_reports.schemas.report import OrganizerEvent, OrganizerInfo, OrganizerReport
from ticket_reports.services.access import Caller, ReportScope
from ticket_reports.services.activity import ActivityFeed, merge_activity
from ticket_reports.services.aggregates import AggregateCollector
from ticket_reports.services.fanout import fan_out

logger = logging.getLogger(__name__)


class OrganizerReportService:
    """Builds the organizer report for the caller's events."""

    def __init__(self, session_factory: SessionFactory, settings: Settings):
        self.session_factory = session_factory
        self.settings = settings
        self.aggregates = AggregateCollector(session_factory)
        self.activity = ActivityFeed(session_factory)

    async def resolve_events(self, caller: Caller) -> list[Event]:
        """Events visible to the caller, newest first.

        Admins see every event, organizers only the events they own.
        """
        query = select(Event).options(selectinload(Event.organizer))
        if not caller.is_admin:
            query = query.where(Event.organizer_id == caller.user_id)
        query = query.order_by(Event.created_at.desc())

        async with self.session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def build(self, caller: Caller) -> OrganizerReport:
        """Build the organizer report for a validated caller."""
        await ping(self.session_factory)

        events = await self.resolve_events(caller)
        scope = ReportScope(event_ids=tuple(event.id for event in events))
        feed_limit = self.settings.ORGANIZER_FEED_SOURCE_LIMIT

        (
            total_tickets,
            total_reservations,
            total_revenue,
            recent_reservations,
            recent_payments,
            event_performance,
        ) = await fan_out(
            self.aggregates.count_tickets(scope),
            self.aggregates.count_distinct_reservations(scope),
            self.aggregates.sum_revenue(scope),
            self.activity.recent_reservations(scope, feed_limit),
            self.activity.recent_scoped_payments(scope, feed_limit),
            self.aggregates.event_performance(
                events, compute_revenue=self.settings.COMPUTE_EVENT_REVENUE
            ),
        )

        recent_activity = merge_activity(
            [recent_reservations, recent_payments],
            limit=self.settings.RECENT_ACTIVITY_LIMIT,
        )
        logger.info(
            f"Organizer report built for {caller.role.value} {caller.user_id}: "
            f"{len(events)} events"
        )

        return OrganizerReport(
            total_events=len(events),
            total_tickets=total_tickets,
            total_reservations=total_reservations,
            total_revenue=float(total_revenue),
            recent_activity=recent_activity,
            event_performance=event_performance,
            events=[
                OrganizerEvent(
                    id=event.id,
                    title=event.title,
                    description=event.description,
                    date=event.date,
                    created_at=event.created_at,
                    organizer=OrganizerInfo(
                        name=event.organizer.name,
                        email=event.organizer.email,
                    ),
                )
                for event in events
            ],
        )
