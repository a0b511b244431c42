"""Recent activity feeds."""

from collections.abc import Iterable, Sequence

from sqlalchemy import DateTime, Numeric, String, bindparam, select, text
from sqlalchemy.orm import selectinload

from ticket_reports.database import SessionFactory
from ticket_reports.models.event import Event
from ticket_reports.models.payment import Payment, PaymentStatus
from ticket_reports.models.reservation import Reservation
from ticket_reports.models.ticket import Ticket
from ticket_reports.models.user import User
from ticket_reports.schemas.activity import ActivityItem, ActivityType
from ticket_reports.services.access import ReportScope

UNKNOWN_EVENT_TITLE = "an event"

# Completed payments for reservations holding a ticket for one of the
# scoped events. The correlated subquery picks one in-scope ticket's
# event title per reservation.
RECENT_SCOPED_PAYMENTS = (
    text(
        """
        SELECT
            p.id,
            p.amount,
            p.created_at,
            u.name AS user_name,
            (
                SELECT e.title
                FROM tickets AS t_sub
                JOIN events AS e ON t_sub.event_id = e.id
                WHERE t_sub.reservation_id = r.id
                AND t_sub.event_id IN :title_event_ids
                LIMIT 1
            ) AS event_title
        FROM payments AS p
        JOIN reservations AS r ON p.reservation_id = r.id
        JOIN users AS u ON r.user_id = u.id
        WHERE p.status = :status
        AND r.id IN (
            SELECT t.reservation_id
            FROM tickets AS t
            WHERE t.event_id IN :event_ids
            AND t.reservation_id IS NOT NULL
        )
        ORDER BY p.created_at DESC
        LIMIT :limit
        """
    )
    .bindparams(
        bindparam("event_ids", expanding=True),
        bindparam("title_event_ids", expanding=True),
    )
    .columns(
        id=String,
        amount=Numeric(10, 2),
        created_at=DateTime,
        user_name=String,
        event_title=String,
    )
)


def merge_activity(
    feeds: Iterable[Sequence[ActivityItem]],
    limit: int,
) -> list[ActivityItem]:
    """Concatenate feeds, newest first, keeping at most ``limit`` entries."""
    items = [item for feed in feeds for item in feed]
    items.sort(key=lambda item: item.timestamp, reverse=True)
    return items[:limit]


def _payment_description(amount, event_title: str | None) -> str:
    return f"Payment of ${amount:.2f} received for {event_title or UNKNOWN_EVENT_TITLE}"


def _first_event_title(tickets: Iterable[Ticket], scope: ReportScope) -> str:
    for ticket in tickets:
        if scope.is_global or ticket.event_id in scope.event_ids:
            return ticket.event.title
    return UNKNOWN_EVENT_TITLE


class ActivityFeed:
    """Bounded slices of recent users, events, reservations and payments."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    async def recent_users(self, limit: int) -> list[ActivityItem]:
        """Latest registered users."""
        async with self.session_factory() as session:
            result = await session.execute(
                select(User).order_by(User.created_at.desc()).limit(limit)
            )
            users = result.scalars().all()

        return [
            ActivityItem(
                id=f"user-{user.id}",
                type=ActivityType.USER_REGISTERED,
                description=f"New user registered: {user.name} ({user.email})",
                timestamp=user.created_at,
            )
            for user in users
        ]

    async def recent_events(
        self,
        limit: int,
        organizer_id: str | None = None,
    ) -> list[ActivityItem]:
        """Latest created events, optionally for a single organizer."""
        query = select(Event).options(selectinload(Event.organizer))
        if organizer_id:
            query = query.where(Event.organizer_id == organizer_id)
        query = query.order_by(Event.created_at.desc()).limit(limit)

        async with self.session_factory() as session:
            result = await session.execute(query)
            events = result.scalars().all()

        return [
            ActivityItem(
                id=f"event-{event.id}",
                type=ActivityType.EVENT_CREATED,
                description=f"New event created: {event.title} by {event.organizer.name}",
                timestamp=event.created_at,
            )
            for event in events
        ]

    async def recent_reservations(
        self,
        scope: ReportScope,
        limit: int,
    ) -> list[ActivityItem]:
        """Latest reservations.

        A scoped feed only lists reservations holding an in-scope ticket;
        the global feed lists every reservation, ticketless ones included.
        """
        if scope.is_empty:
            return []

        query = select(Reservation).options(
            selectinload(Reservation.user),
            selectinload(Reservation.tickets).selectinload(Ticket.event),
        )
        if not scope.is_global:
            query = query.where(
                Reservation.tickets.any(Ticket.event_id.in_(scope.event_ids))
            )
        query = query.order_by(Reservation.created_at.desc()).limit(limit)

        async with self.session_factory() as session:
            result = await session.execute(query)
            reservations = result.scalars().all()

        return [
            ActivityItem(
                id=f"reservation-{reservation.id}",
                type=ActivityType.RESERVATION_MADE,
                description=(
                    f"{reservation.user.name} booked a ticket for "
                    f"{_first_event_title(reservation.tickets, scope)}"
                ),
                timestamp=reservation.created_at,
            )
            for reservation in reservations
        ]

    async def recent_payments(self, limit: int) -> list[ActivityItem]:
        """Latest completed payments across the platform."""
        query = (
            select(Payment)
            .options(
                selectinload(Payment.reservation)
                .selectinload(Reservation.tickets)
                .selectinload(Ticket.event)
            )
            .where(Payment.status == PaymentStatus.COMPLETED)
            .order_by(Payment.created_at.desc())
            .limit(limit)
        )

        async with self.session_factory() as session:
            result = await session.execute(query)
            payments = result.scalars().all()

        items = []
        for payment in payments:
            tickets = payment.reservation.tickets
            title = tickets[0].event.title if tickets else None
            items.append(
                ActivityItem(
                    id=f"payment-{payment.id}",
                    type=ActivityType.PAYMENT_COMPLETED,
                    description=_payment_description(payment.amount, title),
                    timestamp=payment.created_at,
                )
            )
        return items

    async def recent_scoped_payments(
        self,
        scope: ReportScope,
        limit: int,
    ) -> list[ActivityItem]:
        """
        Latest completed payments for reservations in scope.

        Uses a single hand-written join instead of nested eager loads,
        since the filter depends on the scope's event ids.
        """
        if scope.is_empty:
            return []

        event_ids = list(scope.event_ids)
        async with self.session_factory() as session:
            result = await session.execute(
                RECENT_SCOPED_PAYMENTS,
                {
                    "event_ids": event_ids,
                    "title_event_ids": event_ids,
                    "status": PaymentStatus.COMPLETED.value,
                    "limit": limit,
                },
            )
            rows = result.all()

        return [
            ActivityItem(
                id=f"payment-{row.id}",
                type=ActivityType.PAYMENT_COMPLETED,
                description=_payment_description(row.amount, row.event_title),
                timestamp=row.created_at,
            )
            for row in rows
        ]
