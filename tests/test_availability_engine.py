from datetime import date, datetime, time
from decimal import Decimal

from app.schemas.availability import SlotStatus
from app.schemas.configuration import Configuration
from app.services.availability_service import AvailabilityEngine
from tests.helpers import FROZEN_NOW, MONDAY, SATURDAY, make_court, make_reservation

EARLY = datetime(2024, 6, 1, 0, 0)


def slot_map(slots, court_id=1):
    return {s.time: s for s in slots if s.court_id == court_id}


def test_empty_day_is_fully_available():
    engine = AvailabilityEngine(Configuration())
    slots = list(engine.iter_slots(MONDAY, [make_court(1), make_court(2)], [], EARLY))
    assert len(slots) == 30
    assert all(s.status == SlotStatus.AVAILABLE and s.available for s in slots)
    # ordered by time, then court
    assert [(s.time, s.court_id) for s in slots[:4]] == [
        (time(8, 0), 1),
        (time(8, 0), 2),
        (time(9, 0), 1),
        (time(9, 0), 2),
    ]


def test_slots_before_now_are_past():
    engine = AvailabilityEngine(Configuration())
    slots = slot_map(engine.iter_slots(SATURDAY, [make_court()], [], FROZEN_NOW))
    assert slots[time(8, 0)].status == SlotStatus.PAST
    assert slots[time(15, 0)].status == SlotStatus.PAST
    assert slots[time(16, 0)].status == SlotStatus.AVAILABLE
    assert not slots[time(15, 0)].available


def test_blocked_day():
    engine = AvailabilityEngine(Configuration(blocked_dates=[MONDAY]))
    slots = list(engine.iter_slots(MONDAY, [make_court()], [], EARLY))
    assert {s.status for s in slots} == {SlotStatus.BLOCKED}


def test_booked_takes_precedence_over_blocked():
    engine = AvailabilityEngine(Configuration(blocked_dates=[MONDAY]))
    reservations = [make_reservation("10:00", "11:00", reservation_id="r1")]
    slots = slot_map(engine.iter_slots(MONDAY, [make_court()], reservations, EARLY))
    assert slots[time(10, 0)].status == SlotStatus.BOOKED
    assert slots[time(10, 0)].reservation_id == "r1"
    assert slots[time(11, 0)].status == SlotStatus.BLOCKED


def test_unaligned_reservation_occupies_every_overlapping_slot():
    engine = AvailabilityEngine(Configuration())
    reservations = [make_reservation("10:30", "11:30")]
    slots = slot_map(engine.iter_slots(MONDAY, [make_court()], reservations, EARLY))
    assert slots[time(9, 0)].status == SlotStatus.AVAILABLE
    assert slots[time(10, 0)].status == SlotStatus.BOOKED
    assert slots[time(11, 0)].status == SlotStatus.BOOKED
    assert slots[time(12, 0)].status == SlotStatus.AVAILABLE


def test_cancelled_and_other_court_reservations_are_ignored():
    engine = AvailabilityEngine(Configuration())
    reservations = [
        make_reservation("10:00", "11:00", status="cancelled"),
        make_reservation("12:00", "13:00", court_id=2),
    ]
    slots = slot_map(engine.iter_slots(MONDAY, [make_court()], reservations, EARLY))
    assert slots[time(10, 0)].available
    assert slots[time(12, 0)].available


def test_slots_carry_prices():
    engine = AvailabilityEngine(Configuration())
    court = make_court(price_night=Decimal("60"))
    slots = slot_map(engine.iter_slots(MONDAY, [court], [], EARLY))
    assert slots[time(10, 0)].price == Decimal("40")
    assert slots[time(21, 0)].price == Decimal("60")


def test_group_by_time():
    engine = AvailabilityEngine(Configuration())
    reservations = [make_reservation("10:00", "11:00", court_id=2)]
    slots = list(engine.iter_slots(MONDAY, [make_court(1), make_court(2)], reservations, EARLY))
    groups = engine.group_by_time(slots)
    assert len(groups) == 15
    ten = next(g for g in groups if g.time == time(10, 0))
    assert ten.end_time == time(11, 0)
    assert ten.available_courts == 1
    assert [s.court_id for s in ten.slots] == [1, 2]


def test_each_call_recomputes():
    engine = AvailabilityEngine(Configuration())
    reservations = []
    first = list(engine.iter_slots(MONDAY, [make_court()], reservations, EARLY))
    reservations.append(make_reservation("08:00", "09:00"))
    second = list(engine.iter_slots(MONDAY, [make_court()], reservations, EARLY))
    assert first[0].available
    assert not second[0].available


def test_check_slot():
    engine = AvailabilityEngine(Configuration())
    court = make_court()
    reservations = [make_reservation("10:00", "11:00")]

    free = engine.check_slot(MONDAY, time(12, 0), court, reservations, EARLY)
    assert free.available
    assert free.price == Decimal("40")

    taken = engine.check_slot(MONDAY, time(10, 0), court, reservations, EARLY)
    assert not taken.available
    assert taken.reason == "This time is already booked"

    early = engine.check_slot(MONDAY, time(7, 0), court, [], EARLY)
    assert early.reason == "Outside opening hours"

    past = engine.check_slot(SATURDAY, time(9, 0), court, [], FROZEN_NOW)
    assert past.reason == "This time has already passed"

    inactive = engine.check_slot(MONDAY, time(12, 0), make_court(active=False), [], EARLY)
    assert not inactive.available


def test_check_slot_on_blocked_day():
    engine = AvailabilityEngine(Configuration(blocked_dates=[date(2024, 6, 10)]))
    result = engine.check_slot(MONDAY, time(12, 0), make_court(), [], EARLY)
    assert result.reason == "This day is blocked for bookings"
