from datetime import date, time
from decimal import Decimal

import pytest

from app.core.exceptions import ErrorKind
from app.schemas.court import CourtCreate, CourtType, CourtUpdate
from app.schemas.reservation import CustomerDraft, ReservationDraft
from app.services.booking_service import BookingService
from app.services.court_registry import CourtRegistry
from app.services.events import ReservationEvents
from app.services.reservation_repository import ReservationRepository
from tests.helpers import FROZEN_NOW, VALID_PHONE

TODAY = FROZEN_NOW.date()


async def book(db, court_id, day):
    outcome = await BookingService(events=ReservationEvents()).create_reservation(
        db,
        ReservationDraft(
            court_id=court_id,
            date=day,
            start_time=time(18, 0),
            end_time=time(19, 0),
            customer=CustomerDraft(name="Ana", phone=VALID_PHONE),
        ),
        now=FROZEN_NOW,
    )
    assert outcome.ok
    return outcome.reservation


@pytest.mark.asyncio
async def test_seeded_courts_in_display_order(db, seeded):
    courts = await CourtRegistry(db).list()
    assert [c.name for c in courts] == ["Court 1", "Court 2"]
    assert courts[0].type == CourtType.INDOOR.value


@pytest.mark.asyncio
async def test_active_only_listing(db, seeded):
    registry = CourtRegistry(db)
    await registry.update(1, CourtUpdate(active=False))
    await registry.create(CourtCreate(name="Court 0", type=CourtType.TURF, order=0))

    assert [c.name for c in await registry.list(active_only=True)] == ["Court 0", "Court 2"]
    assert len(await registry.list()) == 3


@pytest.mark.asyncio
async def test_price_override_update(db, seeded):
    court = await CourtRegistry(db).update(1, CourtUpdate(price_night=Decimal("55")))
    assert court.price_night == Decimal("55")
    assert court.price_normal is None


@pytest.mark.asyncio
async def test_update_unknown_court(db, seeded):
    assert await CourtRegistry(db).update(99, CourtUpdate(name="Nope")) is None


@pytest.mark.asyncio
async def test_delete_rejected_with_upcoming_reservations(db, seeded):
    reservation = await book(db, 2, date(2024, 7, 1))

    errors = await CourtRegistry(db).delete(2, TODAY)
    assert [e.kind for e in errors] == [ErrorKind.CONSTRAINT]
    assert await CourtRegistry(db).get(2) is not None

    await BookingService(events=ReservationEvents()).cancel_reservation(db, reservation.id)

    assert await CourtRegistry(db).delete(2, TODAY) == []
    assert await CourtRegistry(db).get(2) is None
    assert await ReservationRepository(db).get_by_id(reservation.id) is None


@pytest.mark.asyncio
async def test_delete_ignores_past_reservations(db, seeded):
    await book(db, 1, date(2024, 7, 1))

    # a week later the booking is history
    errors = await CourtRegistry(db).delete(1, date(2024, 7, 8))
    assert errors == []


@pytest.mark.asyncio
async def test_delete_unknown_court(db, seeded):
    errors = await CourtRegistry(db).delete(99, TODAY)
    assert [e.kind for e in errors] == [ErrorKind.NOT_FOUND]
