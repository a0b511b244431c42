"""Tests for recent activity feeds."""

from datetime import datetime, timedelta, timezone

import pytest

from ticket_reports.models import PaymentStatus, Role
from ticket_reports.schemas.activity import ActivityItem, ActivityType
from ticket_reports.services.access import GLOBAL_SCOPE, ReportScope
from ticket_reports.services.activity import ActivityFeed, merge_activity
from tests.factories import (
    ago,
    make_event,
    make_payment,
    make_reservation,
    make_ticket,
    make_user,
)


@pytest.fixture
def feed(session_factory) -> ActivityFeed:
    return ActivityFeed(session_factory)


def item(index: int, timestamp: datetime) -> ActivityItem:
    return ActivityItem(
        id=f"user-{index}",
        type=ActivityType.USER_REGISTERED,
        description=f"entry {index}",
        timestamp=timestamp,
    )


class TestMergeActivity:
    """Tests for merging feeds."""

    def test_sorted_newest_first_and_truncated(self):
        base = datetime(2026, 10, 1)
        first = [item(i, base + timedelta(hours=i)) for i in range(0, 12, 2)]
        second = [item(i, base + timedelta(hours=i)) for i in range(1, 12, 2)]

        merged = merge_activity([first, second], limit=10)

        assert len(merged) == 10
        timestamps = [entry.timestamp for entry in merged]
        assert timestamps == sorted(timestamps, reverse=True)
        assert merged[0].id == "user-11"

    def test_empty_feeds(self):
        assert merge_activity([[], []], limit=10) == []

    def test_timestamp_serialized_as_utc(self):
        entry = item(1, datetime(2026, 10, 1, 8, 30))
        assert entry.model_dump(mode="json", by_alias=True)["timestamp"] == "2026-10-01T08:30:00.000Z"

    def test_aware_timestamp_converted_to_utc(self):
        paris = timezone(timedelta(hours=2))
        entry = item(1, datetime(2026, 10, 1, 10, 30, tzinfo=paris))
        assert entry.model_dump(mode="json")["timestamp"] == "2026-10-01T08:30:00.000Z"


@pytest.mark.asyncio
async def test_recent_users(feed, seed):
    users = [make_user(f"User {i}", created_at=ago(days=i)) for i in range(5)]
    await seed(*users)

    items = await feed.recent_users(3)

    assert [entry.id for entry in items] == [f"user-{user.id}" for user in users[:3]]
    assert items[0].type == ActivityType.USER_REGISTERED
    assert items[0].description == "New user registered: User 0 (user.0@example.com)"


@pytest.mark.asyncio
async def test_recent_events_filtered_by_organizer(feed, seed):
    alice = make_user("Alice", Role.ORGANIZER)
    bob = make_user("Bob", Role.ORGANIZER)
    await seed(alice, bob)
    await seed(
        make_event(alice, "Alice Old", created_at=ago(days=9)),
        make_event(bob, "Bob New", created_at=ago(days=1)),
        make_event(alice, "Alice New", created_at=ago(days=2)),
    )

    everything = await feed.recent_events(3)
    only_alice = await feed.recent_events(3, organizer_id=alice.id)

    assert [entry.description for entry in everything] == [
        "New event created: Bob New by Bob",
        "New event created: Alice New by Alice",
        "New event created: Alice Old by Alice",
    ]
    assert [entry.description for entry in only_alice] == [
        "New event created: Alice New by Alice",
        "New event created: Alice Old by Alice",
    ]


@pytest.mark.asyncio
async def test_recent_reservations_names_in_scope_event(feed, seed):
    alice = make_user("Alice", Role.ORGANIZER)
    bob = make_user("Bob", Role.ORGANIZER)
    carol = make_user("Carol")
    await seed(alice, bob, carol)
    alice_event = make_event(alice, "Jazz Night")
    bob_event = make_event(bob, "Rock Night")
    booking = make_reservation(carol, created_at=ago(hours=3))
    other = make_reservation(carol, created_at=ago(hours=1))
    await seed(alice_event, bob_event)
    await seed(booking, other)
    await seed(
        make_ticket(bob_event, booking),
        make_ticket(alice_event, booking),
        make_ticket(bob_event, other),
    )

    items = await feed.recent_reservations(ReportScope(event_ids=(alice_event.id,)), 5)

    assert len(items) == 1
    assert items[0].id == f"reservation-{booking.id}"
    assert items[0].type == ActivityType.RESERVATION_MADE
    assert items[0].description == "Carol booked a ticket for Jazz Night"


@pytest.mark.asyncio
async def test_recent_reservations_empty_scope(feed):
    assert await feed.recent_reservations(ReportScope(event_ids=()), 5) == []


@pytest.mark.asyncio
async def test_recent_reservations_global_scope_includes_ticketless(feed, seed):
    organizer = make_user("Alice", Role.ORGANIZER)
    carol = make_user("Carol")
    await seed(organizer, carol)
    event = make_event(organizer, "Jazz Night")
    booked = make_reservation(carol, created_at=ago(hours=3))
    empty = make_reservation(carol, created_at=ago(hours=1))
    await seed(event)
    await seed(booked, empty)
    await seed(make_ticket(event, booked))

    items = await feed.recent_reservations(GLOBAL_SCOPE, 5)

    assert [entry.description for entry in items] == [
        "Carol booked a ticket for an event",
        "Carol booked a ticket for Jazz Night",
    ]


@pytest.mark.asyncio
async def test_recent_payments_orm(feed, seed):
    organizer = make_user("Alice", Role.ORGANIZER)
    carol = make_user("Carol")
    await seed(organizer, carol)
    event = make_event(organizer, "Jazz Night")
    booking = make_reservation(carol)
    await seed(event)
    await seed(booking)
    await seed(
        make_ticket(event, booking),
        make_payment(booking, "25", created_at=ago(hours=2)),
        make_payment(booking, "80", status=PaymentStatus.PENDING, created_at=ago(hours=1)),
    )

    items = await feed.recent_payments(3)

    assert len(items) == 1
    assert items[0].type == ActivityType.PAYMENT_COMPLETED
    assert items[0].description == "Payment of $25.00 received for Jazz Night"


@pytest.mark.asyncio
async def test_recent_scoped_payments_join_query(feed, seed):
    alice = make_user("Alice", Role.ORGANIZER)
    bob = make_user("Bob", Role.ORGANIZER)
    carol = make_user("Carol")
    await seed(alice, bob, carol)
    jazz = make_event(alice, "Jazz Night")
    rock = make_event(bob, "Rock Night")
    await seed(jazz, rock)

    bookings = [make_reservation(carol, created_at=ago(days=i + 1)) for i in range(7)]
    await seed(*bookings)
    stray = make_reservation(carol)
    await seed(stray)

    payments = [
        make_payment(booking, f"{10 + i}.5", created_at=ago(hours=i + 1))
        for i, booking in enumerate(bookings)
    ]
    await seed(
        *[make_ticket(jazz, booking) for booking in bookings],
        make_ticket(rock, stray),
        make_payment(stray, "999", created_at=ago(minutes=1)),
        make_payment(bookings[0], "5", status=PaymentStatus.REFUNDED, created_at=ago(minutes=2)),
        *payments,
    )

    items = await feed.recent_scoped_payments(ReportScope(event_ids=(jazz.id,)), 5)

    assert [entry.id for entry in items] == [f"payment-{p.id}" for p in payments[:5]]
    assert items[0].description == "Payment of $10.50 received for Jazz Night"
    timestamps = [entry.timestamp for entry in items]
    assert all(isinstance(ts, datetime) for ts in timestamps)
    assert timestamps == sorted(timestamps, reverse=True)


@pytest.mark.asyncio
async def test_recent_scoped_payments_empty_scope(feed):
    assert await feed.recent_scoped_payments(ReportScope(event_ids=()), 5) == []

