"""Availability service for computing bookable slots."""
import logging
from datetime import date, datetime, time as dt_time
from itertools import groupby
from typing import Iterable, Iterator, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.court import Court
from app.schemas.availability import (
    AvailabilityResponse,
    AvailabilitySlot,
    SlotCheckResult,
    SlotStatus,
    TimeSlotGroup,
)
from app.schemas.configuration import Configuration
from app.schemas.reservation import ReservationStatus
from app.services.configuration_store import ConfigurationStore
from app.services.court_registry import CourtRegistry
from app.services.pricing import PricingEngine
from app.services.reservation_repository import ReservationRepository
from app.services.timeslots import (
    facility_now,
    from_minutes,
    iter_slots,
    overlaps,
    slot_start,
    to_minutes,
)

logger = logging.getLogger(__name__)


class AvailabilityEngine:
    """
    Computes the slot grid for a date from configuration, courts and
    reservations. Holds no state between calls; every call recomputes.
    """

    def __init__(self, config: Configuration, pricing: Optional[PricingEngine] = None):
        self.config = config
        self.pricing = pricing or PricingEngine(config)

    def _occupying(
        self, court_id: int, day: date, start: dt_time, end: dt_time, reservations: Sequence
    ):
        for reservation in reservations:
            if reservation.court_id != court_id or reservation.date != day:
                continue
            if reservation.status == ReservationStatus.CANCELLED.value:
                continue
            if overlaps(start, end, reservation.start_time, reservation.end_time):
                return reservation
        return None

    def iter_slots(
        self,
        day: date,
        courts: Sequence[Court],
        reservations: Sequence,
        now: datetime,
    ) -> Iterator[AvailabilitySlot]:
        """
        Yield one slot per (time, court), ordered by time then court.

        Args:
            day: Facility-local date
            courts: Courts to evaluate, in display order
            reservations: Reservations for the date (cancelled ones are ignored)
            now: Facility-local naive datetime used for the past-slot cutoff
        """
        blocked = self.config.is_blocked(day)
        for start, end in iter_slots(
            self.config.opening_time, self.config.closing_time, self.config.slot_duration
        ):
            is_past = slot_start(day, start) < now
            for court in courts:
                occupying = self._occupying(court.id, day, start, end, reservations)
                if occupying is not None:
                    status = SlotStatus.BOOKED
                elif blocked:
                    status = SlotStatus.BLOCKED
                elif is_past:
                    status = SlotStatus.PAST
                else:
                    status = SlotStatus.AVAILABLE

                yield AvailabilitySlot(
                    court_id=court.id,
                    court_name=court.name,
                    date=day,
                    time=start,
                    end_time=end,
                    available=status == SlotStatus.AVAILABLE,
                    status=status,
                    reservation_id=occupying.id if occupying is not None else None,
                    price=self.pricing.price(day, start, court),
                )

    @staticmethod
    def group_by_time(slots: Iterable[AvailabilitySlot]) -> List[TimeSlotGroup]:
        groups = []
        for start, items in groupby(slots, key=lambda s: s.time):
            items = list(items)
            groups.append(
                TimeSlotGroup(
                    time=start,
                    end_time=items[0].end_time,
                    available_courts=sum(1 for s in items if s.available),
                    slots=items,
                )
            )
        return groups

    def check_slot(
        self,
        day: date,
        start: dt_time,
        court: Court,
        reservations: Sequence,
        now: datetime,
    ) -> SlotCheckResult:
        """Whether a single slot starting at ``start`` can be booked."""
        end_minutes = min(
            to_minutes(start) + self.config.slot_duration, to_minutes(self.config.closing_time)
        )
        if not court.active:
            return SlotCheckResult(available=False, reason="Court is not available for booking")
        if start < self.config.opening_time or to_minutes(start) >= end_minutes:
            return SlotCheckResult(available=False, reason="Outside opening hours")
        if self.config.is_blocked(day):
            return SlotCheckResult(available=False, reason="This day is blocked for bookings")
        if slot_start(day, start) < now:
            return SlotCheckResult(available=False, reason="This time has already passed")

        end = from_minutes(end_minutes)
        if self._occupying(court.id, day, start, end, reservations) is not None:
            return SlotCheckResult(available=False, reason="This time is already booked")

        return SlotCheckResult(available=True, price=self.pricing.price(day, start, court))


class AvailabilityService:
    """Service for loading availability inputs and running the engine."""

    async def get_availability(
        self,
        db: AsyncSession,
        day: date,
        court_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> AvailabilityResponse:
        """
        Get availability for a date.

        Args:
            db: Database session
            day: Facility-local date
            court_id: Restrict to one court; all active courts when omitted
            now: Current time (aware, or naive facility-local); defaults to the clock

        Returns:
            Availability for every slot, flat and grouped by time

        Raises:
            ValueError: If the court does not exist
        """
        config = await ConfigurationStore(db).get()
        registry = CourtRegistry(db)

        if court_id is not None:
            court = await registry.get(court_id)
            if not court:
                raise ValueError(f"Court {court_id} not found")
            courts = [court]
        else:
            courts = await registry.list(active_only=True)

        reservations = await ReservationRepository(db).active_on(day)
        local_now = facility_now(config.regional.timezone, now)

        engine = AvailabilityEngine(config)
        slots = list(engine.iter_slots(day, courts, reservations, local_now))

        logger.debug(f"Computed {len(slots)} slots for {day} (court={court_id})")

        return AvailabilityResponse(
            date=day,
            court_id=court_id,
            blocked=config.is_blocked(day),
            total_slots=len(slots),
            available_slots=sum(1 for s in slots if s.available),
            slots=slots,
            by_time=engine.group_by_time(slots),
        )

    async def check_slot(
        self,
        db: AsyncSession,
        day: date,
        start: dt_time,
        court_id: int,
        now: Optional[datetime] = None,
    ) -> SlotCheckResult:
        config = await ConfigurationStore(db).get()
        court = await CourtRegistry(db).get(court_id)
        if not court:
            return SlotCheckResult(available=False, reason=f"Court {court_id} not found")

        reservations = await ReservationRepository(db).active_for(court_id, day)
        engine = AvailabilityEngine(config)
        return engine.check_slot(
            day, start, court, reservations, facility_now(config.regional.timezone, now)
        )


# Singleton instance
availability_service = AvailabilityService()
