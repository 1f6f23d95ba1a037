from datetime import date, time
from decimal import Decimal

import pytest

from app.schemas.reservation import CustomerDraft, ReservationDraft, ReservationStatus
from app.schemas.stats import StatsPeriod
from app.services.booking_service import BookingService
from app.services.events import ReservationEvents
from app.services.stats_service import period_bounds, stats_service
from tests.helpers import FROZEN_NOW, VALID_PHONE

JULY_1 = date(2024, 7, 1)
JULY_3 = date(2024, 7, 3)


def test_period_bounds():
    assert period_bounds(StatsPeriod.DAY, JULY_3) == (JULY_3, JULY_3)
    assert period_bounds(StatsPeriod.WEEK, JULY_3) == (JULY_1, date(2024, 7, 7))
    assert period_bounds(StatsPeriod.MONTH, date(2024, 2, 10)) == (
        date(2024, 2, 1),
        date(2024, 2, 29),
    )


async def book(service, db, court_id, day, start, status=ReservationStatus.PENDING):
    start_time = time.fromisoformat(start)
    outcome = await service.create_reservation(
        db,
        ReservationDraft(
            court_id=court_id,
            date=day,
            start_time=start_time,
            end_time=time(start_time.hour + 1, start_time.minute),
            customer=CustomerDraft(name="Ana", phone=VALID_PHONE),
        ),
        status=status,
        now=FROZEN_NOW,
    )
    assert outcome.ok
    return outcome.reservation


@pytest.mark.asyncio
async def test_week_stats(db, seeded):
    service = BookingService(events=ReservationEvents())
    await book(service, db, 1, JULY_1, "10:00", ReservationStatus.CONFIRMED)
    await book(service, db, 2, JULY_1, "10:00", ReservationStatus.PAID)
    await book(service, db, 1, JULY_3, "21:00")
    cancelled = await book(service, db, 2, JULY_3, "18:00", ReservationStatus.CONFIRMED)
    await service.cancel_reservation(db, cancelled.id)
    # outside the week
    await book(service, db, 1, date(2024, 7, 8), "10:00", ReservationStatus.PAID)

    stats = await stats_service.get_stats(db, StatsPeriod.WEEK, JULY_3)

    assert (stats.from_date, stats.to_date) == (JULY_1, date(2024, 7, 7))
    assert stats.total_reservations == 4
    assert (stats.pending, stats.confirmed, stats.paid, stats.cancelled) == (1, 1, 1, 1)
    assert stats.estimated_revenue == Decimal("80")
    assert stats.popular_hours[0].time == "10:00"
    assert stats.popular_hours[0].count == 2

    occupancy = {o.court_id: o for o in stats.occupancy}
    assert occupancy[1].reservations == 2
    assert occupancy[1].available_slots == 7 * 15
    assert occupancy[2].reservations == 1
    assert occupancy[2].occupancy_percentage == round(1 / 105 * 100, 2)


@pytest.mark.asyncio
async def test_empty_day(db, seeded):
    stats = await stats_service.get_stats(db, StatsPeriod.DAY, JULY_1)
    assert stats.total_reservations == 0
    assert stats.estimated_revenue == Decimal("0")
    assert stats.popular_hours == []
    assert all(o.occupancy_percentage == 0 for o in stats.occupancy)
