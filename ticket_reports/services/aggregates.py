"""Aggregate queries shared by the reports.

Every query runs in its own session so callers can run them concurrently
with ``fan_out``.
"""

import calendar
import logging
from collections import Counter
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.exc import SQLAlchemyError

from ticket_reports.database import SessionFactory
from ticket_reports.models.event import Event
from ticket_reports.models.payment import Payment, PaymentStatus
from ticket_reports.models.reservation import Reservation
from ticket_reports.models.ticket import Ticket
from ticket_reports.models.user import User
from ticket_reports.schemas.report import EventPerformance, MonthCount, RoleCount
from ticket_reports.services.access import ReportScope
from ticket_reports.services.fanout import fan_out

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time as a naive UTC value, matching stored timestamps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def months_ago(now: datetime, months: int) -> datetime:
    """Same day and time ``months`` calendar months before ``now``.

    The day is clamped to the length of the target month.
    """
    month_index = now.year * 12 + now.month - 1 - months
    year, month = divmod(month_index, 12)
    day = min(now.day, calendar.monthrange(year, month + 1)[1])
    return now.replace(year=year, month=month + 1, day=day)


def conversion_rate(sold: int, total: int) -> float:
    """Percentage of tickets held by reservations, 0 when there are none."""
    if total == 0:
        return 0.0
    return sold / total * 100


class AggregateCollector:
    """Counts, sums and group-bys over the reporting schema."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    async def _scalar(self, query: Select):
        async with self.session_factory() as session:
            result = await session.execute(query)
            return result.scalar_one()

    async def _rows(self, query: Select) -> list:
        async with self.session_factory() as session:
            result = await session.execute(query)
            return list(result.all())

    @staticmethod
    def _in_scope(query: Select, column, scope: ReportScope) -> Select:
        if scope.is_global:
            return query
        return query.where(column.in_(scope.event_ids))

    async def count_events(self, scope: ReportScope) -> int:
        """Count events in scope."""
        if scope.is_empty:
            return 0
        query = self._in_scope(select(func.count(Event.id)), Event.id, scope)
        return await self._scalar(query)

    async def count_tickets(self, scope: ReportScope) -> int:
        """Count tickets whose event is in scope."""
        if scope.is_empty:
            return 0
        query = self._in_scope(select(func.count(Ticket.id)), Ticket.event_id, scope)
        return await self._scalar(query)

    async def count_distinct_reservations(self, scope: ReportScope) -> int:
        """Count distinct reservations holding at least one in-scope ticket."""
        if scope.is_empty:
            return 0
        query = select(func.count(distinct(Ticket.reservation_id))).where(
            Ticket.reservation_id.is_not(None)
        )
        return await self._scalar(self._in_scope(query, Ticket.event_id, scope))

    async def sum_revenue(self, scope: ReportScope) -> Decimal:
        """
        Sum completed payments linked to the scope.

        A payment is linked when its reservation holds a ticket for an
        in-scope event. The global scope sums every completed payment.
        """
        if scope.is_empty:
            return Decimal("0")

        query = select(func.coalesce(func.sum(Payment.amount), 0)).where(
            Payment.status == PaymentStatus.COMPLETED
        )
        if not scope.is_global:
            query = query.where(
                Payment.reservation_id.in_(
                    select(Ticket.reservation_id).where(
                        Ticket.event_id.in_(scope.event_ids),
                        Ticket.reservation_id.is_not(None),
                    )
                )
            )
        total = await self._scalar(query)
        return Decimal(total or 0)

    async def count_users(self) -> int:
        """Count all users."""
        return await self._scalar(select(func.count(User.id)))

    async def count_reservations(self) -> int:
        """Count all reservations."""
        return await self._scalar(select(func.count(Reservation.id)))

    async def count_or_zero(self, name: str, count: Callable[[], Awaitable[int]]) -> int:
        """Run a count, falling back to 0 if the data store rejects it."""
        try:
            return await count()
        except SQLAlchemyError as e:
            logger.warning(f"Count of {name} failed, reporting 0: {e}")
            return 0

    async def users_by_role(self) -> list[RoleCount]:
        """Number of users per role."""
        query = (
            select(User.role, func.count(User.id).label("total"))
            .group_by(User.role)
            .order_by(User.role)
        )
        rows = await self._rows(query)
        return [RoleCount(role=row.role, count=row.total) for row in rows]

    async def events_by_month(self, months: int, now: datetime | None = None) -> int:
        """
        Legacy trend figure for events created in the last ``months`` months.

        Events are grouped by their exact creation timestamp, so the value
        is the number of distinct timestamps rather than a per-month count.
        ``events_per_month`` gives the calendar-month breakdown.
        """
        cutoff = months_ago(now or utc_now(), months)
        groups = (
            select(Event.created_at)
            .where(Event.created_at >= cutoff)
            .group_by(Event.created_at)
            .subquery()
        )
        return await self._scalar(select(func.count()).select_from(groups))

    async def events_per_month(
        self,
        months: int,
        now: datetime | None = None,
    ) -> list[MonthCount]:
        """Events created in the last ``months`` months, per calendar month."""
        cutoff = months_ago(now or utc_now(), months)
        rows = await self._rows(
            select(Event.created_at).where(Event.created_at >= cutoff)
        )
        buckets = Counter(row.created_at.strftime("%Y-%m") for row in rows)
        return [
            MonthCount(month=month, count=count)
            for month, count in sorted(buckets.items())
        ]

    async def _tickets_per_event(self, event_ids: Sequence[str]) -> dict[str, int]:
        rows = await self._rows(
            select(Ticket.event_id, func.count(Ticket.id).label("total"))
            .where(Ticket.event_id.in_(event_ids))
            .group_by(Ticket.event_id)
        )
        return {row.event_id: row.total for row in rows}

    async def _reservations_per_event(self, event_ids: Sequence[str]) -> dict[str, int]:
        rows = await self._rows(
            select(
                Ticket.event_id,
                func.count(distinct(Ticket.reservation_id)).label("total"),
            )
            .where(
                Ticket.event_id.in_(event_ids),
                Ticket.reservation_id.is_not(None),
            )
            .group_by(Ticket.event_id)
        )
        return {row.event_id: row.total for row in rows}

    async def _revenue_per_event(self, event_ids: Sequence[str]) -> dict[str, Decimal]:
        # One row per (event, reservation) so multi-ticket reservations
        # contribute their payments once per event.
        holdings = (
            select(Ticket.event_id, Ticket.reservation_id)
            .where(
                Ticket.event_id.in_(event_ids),
                Ticket.reservation_id.is_not(None),
            )
            .distinct()
            .subquery()
        )
        rows = await self._rows(
            select(holdings.c.event_id, func.sum(Payment.amount).label("revenue"))
            .join(holdings, Payment.reservation_id == holdings.c.reservation_id)
            .where(Payment.status == PaymentStatus.COMPLETED)
            .group_by(holdings.c.event_id)
        )
        return {row.event_id: Decimal(row.revenue or 0) for row in rows}

    async def event_performance(
        self,
        events: Sequence[Event],
        compute_revenue: bool = True,
    ) -> list[EventPerformance]:
        """
        Per-event ticket, reservation and revenue figures.

        Args:
            events: In-scope events, in the order rows should be returned
            compute_revenue: When False, revenue is reported as 0

        Returns:
            One row per event
        """
        if not events:
            return []

        event_ids = [event.id for event in events]
        tickets, reservations = await fan_out(
            self._tickets_per_event(event_ids),
            self._reservations_per_event(event_ids),
        )
        revenue = await self._revenue_per_event(event_ids) if compute_revenue else {}

        rows = []
        for event in events:
            total = tickets.get(event.id, 0)
            sold = reservations.get(event.id, 0)
            rows.append(
                EventPerformance(
                    id=event.id,
                    title=event.title,
                    date=event.date,
                    total_tickets=total,
                    sold_tickets=sold,
                    revenue=float(revenue.get(event.id, 0)),
                    conversion_rate=conversion_rate(sold, total),
                )
            )
        return rows
