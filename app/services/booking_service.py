"""Booking service: validated, race-free reservation changes."""
import asyncio
import logging
import weakref
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BookingIssue, ErrorKind
from app.models.court import Court
from app.models.reservation import Reservation
from app.schemas.configuration import Configuration
from app.schemas.reservation import (
    CustomerDraft,
    ReservationDraft,
    ReservationOrigin,
    ReservationStatus,
    ReservationUpdate,
)
from app.services.booking_validator import BookingValidator
from app.services.configuration_store import ConfigurationStore
from app.services.court_registry import CourtRegistry
from app.services.events import ReservationEvent, ReservationEvents, reservation_events
from app.services.pricing import PricingEngine
from app.services.reservation_repository import ReservationRepository
from app.services.timeslots import facility_now

logger = logging.getLogger(__name__)

CORE_FIELDS = {"court_id", "date", "start_time", "end_time", "customer"}


class BookingLocks:
    """One asyncio.Lock per (court, date), dropped once nobody holds it."""

    def __init__(self):
        self._locks = weakref.WeakValueDictionary()

    def for_slot(self, court_id: int, day: date) -> asyncio.Lock:
        key = (court_id, day)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock


@dataclass
class BookingOutcome:
    """Result of a booking operation: the reservation, or every reason it failed."""

    reservation: Optional[Reservation] = None
    errors: List[BookingIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def not_found(cls, reservation_id: str) -> "BookingOutcome":
        return cls(
            errors=[
                BookingIssue(
                    kind=ErrorKind.NOT_FOUND,
                    message=f"Reservation {reservation_id} not found",
                )
            ]
        )


def _court_issues(court: Optional[Court], court_id: Optional[int]) -> List[BookingIssue]:
    if court_id is None:
        return []
    if court is None:
        return [
            BookingIssue(
                kind=ErrorKind.UNKNOWN_COURT,
                field="court_id",
                message=f"Court {court_id} does not exist",
            )
        ]
    if not court.active:
        return [
            BookingIssue(
                kind=ErrorKind.INACTIVE_COURT,
                field="court_id",
                message=f"Court {court.name} is not available for booking",
            )
        ]
    return []


class BookingService:
    """
    Orchestrates validation, pricing and persistence of reservations.

    Creating or moving a reservation is a critical section per (court, date):
    the in-process lock serializes concurrent requests and the court row is
    locked inside the transaction for other processes. Conflicts are checked
    again inside the critical section right before the write is committed.
    """

    def __init__(self, events: Optional[ReservationEvents] = None, locks: Optional[BookingLocks] = None):
        self.events = events or reservation_events
        self.locks = locks or BookingLocks()

    async def _prepare(self, db: AsyncSession, draft: ReservationDraft):
        court = await CourtRegistry(db).get(draft.court_id) if draft.court_id else None
        existing = []
        if draft.court_id and draft.date:
            existing = await ReservationRepository(db).active_for(draft.court_id, draft.date)
        return court, existing

    async def _lock_court_row(self, db: AsyncSession, court_id: int) -> None:
        await db.execute(select(Court.id).where(Court.id == court_id).with_for_update())

    async def _recheck_conflicts(
        self,
        db: AsyncSession,
        validator: BookingValidator,
        draft: ReservationDraft,
        exclude_reservation_id: Optional[str] = None,
    ) -> List[BookingIssue]:
        await self._lock_court_row(db, draft.court_id)
        existing = await ReservationRepository(db).active_for(draft.court_id, draft.date)
        return validator.find_conflicts(draft, existing, exclude_reservation_id)

    async def create_reservation(
        self,
        db: AsyncSession,
        draft: ReservationDraft,
        price: Optional[Decimal] = None,
        status: ReservationStatus = ReservationStatus.PENDING,
        origin: ReservationOrigin = ReservationOrigin.ADMIN,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> BookingOutcome:
        """
        Validate and create a reservation.

        Args:
            db: Database session
            draft: Court, date, times and customer
            price: Snapshot price; quoted by the pricing engine when omitted
            status: Initial status
            origin: Where the booking came from
            notes: Free text
            now: Current time (aware, or naive facility-local)

        Returns:
            BookingOutcome with the new reservation or every validation error
        """
        config = await ConfigurationStore(db).get()
        local_now = facility_now(config.regional.timezone, now)
        validator = BookingValidator(config)

        court, existing = await self._prepare(db, draft)
        result = validator.validate(draft, existing, local_now)
        errors = _court_issues(court, draft.court_id) + result.errors
        if errors:
            logger.info(
                f"Rejected booking for court {draft.court_id} on {draft.date}: "
                f"{[e.kind.value for e in errors]}"
            )
            await db.rollback()
            return BookingOutcome(errors=errors)

        async with self.locks.for_slot(draft.court_id, draft.date):
            try:
                conflicts = await self._recheck_conflicts(db, validator, draft)
                if conflicts:
                    logger.info(
                        f"Booking for court {draft.court_id} on {draft.date} lost a race: "
                        f"{conflicts[0].message}"
                    )
                    await db.rollback()
                    return BookingOutcome(errors=conflicts)

                if price is None:
                    price = PricingEngine(config).price(draft.date, draft.start_time, court)

                reservation = await ReservationRepository(db).create(
                    {
                        "court_id": draft.court_id,
                        "date": draft.date,
                        "start_time": draft.start_time,
                        "end_time": draft.end_time,
                        "customer": {
                            "name": draft.customer.name.strip(),
                            "phone": draft.customer.phone.strip(),
                            "email": draft.customer.email or None,
                            "document_id": draft.customer.document_id or None,
                        },
                        "price": price,
                        "status": status,
                        "origin": origin,
                        "notes": notes,
                    }
                )
                await db.commit()
            except Exception:
                await db.rollback()
                raise

        logger.info(
            f"Created reservation {reservation.id} for court {reservation.court_id} on "
            f"{reservation.date} {reservation.start_time:%H:%M}-{reservation.end_time:%H:%M}"
        )
        self.events.publish(ReservationEvent.CREATED, reservation)
        return BookingOutcome(reservation=reservation)

    async def update_reservation(
        self,
        db: AsyncSession,
        reservation_id: str,
        changes: ReservationUpdate,
        now: Optional[datetime] = None,
    ) -> BookingOutcome:
        """
        Apply a partial update.

        Changing the court, date, times or customer re-runs validation with
        the reservation itself excluded from conflict detection.
        """
        repository = ReservationRepository(db)
        reservation = await repository.get_by_id(reservation_id)
        if reservation is None:
            return BookingOutcome.not_found(reservation_id)

        data = changes.model_dump(exclude_unset=True)
        if not CORE_FIELDS & data.keys():
            reservation = await repository.update(reservation_id, data)
            await db.commit()
            self.events.publish(ReservationEvent.UPDATED, reservation)
            return BookingOutcome(reservation=reservation)

        customer = reservation.customer
        customer.update(data.get("customer") or {})
        draft = ReservationDraft(
            court_id=data.get("court_id", reservation.court_id),
            date=data.get("date", reservation.date),
            start_time=data.get("start_time", reservation.start_time),
            end_time=data.get("end_time", reservation.end_time),
            customer=CustomerDraft(**customer),
        )
        data["customer"] = customer

        config: Configuration = await ConfigurationStore(db).get()
        local_now = facility_now(config.regional.timezone, now)
        validator = BookingValidator(config)

        court, existing = await self._prepare(db, draft)
        result = validator.validate(draft, existing, local_now, exclude_reservation_id=reservation_id)
        court_errors = _court_issues(court, draft.court_id) if "court_id" in data else []
        errors = court_errors + result.errors
        if errors:
            await db.rollback()
            return BookingOutcome(errors=errors)

        async with self.locks.for_slot(draft.court_id, draft.date):
            try:
                conflicts = await self._recheck_conflicts(db, validator, draft, reservation_id)
                if conflicts:
                    await db.rollback()
                    return BookingOutcome(errors=conflicts)
                reservation = await repository.update(reservation_id, data)
                await db.commit()
            except Exception:
                await db.rollback()
                raise

        logger.info(f"Updated reservation {reservation_id}")
        self.events.publish(ReservationEvent.UPDATED, reservation)
        return BookingOutcome(reservation=reservation)

    async def update_status(
        self,
        db: AsyncSession,
        reservation_id: str,
        status: ReservationStatus,
    ) -> BookingOutcome:
        """
        Move a reservation to a new status.

        Any status can be reached from any non-cancelled status. Cancelled is
        terminal: setting it again is a no-op, leaving it is rejected.
        """
        repository = ReservationRepository(db)
        reservation = await repository.get_by_id(reservation_id)
        if reservation is None:
            return BookingOutcome.not_found(reservation_id)

        if status == ReservationStatus.CANCELLED:
            return await self.cancel_reservation(db, reservation_id)

        if reservation.status == ReservationStatus.CANCELLED.value:
            return BookingOutcome(
                reservation=reservation,
                errors=[
                    BookingIssue(
                        kind=ErrorKind.INVALID_TRANSITION,
                        field="status",
                        message="A cancelled reservation cannot be reactivated",
                    )
                ],
            )

        if reservation.status == status.value:
            return BookingOutcome(reservation=reservation)

        reservation = await repository.update(reservation_id, {"status": status})
        await db.commit()
        logger.info(f"Reservation {reservation_id} is now {status.value}")
        self.events.publish(ReservationEvent.UPDATED, reservation)
        return BookingOutcome(reservation=reservation)

    async def cancel_reservation(self, db: AsyncSession, reservation_id: str) -> BookingOutcome:
        """Soft-cancel a reservation; cancelling twice succeeds without changes."""
        repository = ReservationRepository(db)
        reservation = await repository.get_by_id(reservation_id)
        if reservation is None:
            return BookingOutcome.not_found(reservation_id)

        if reservation.status == ReservationStatus.CANCELLED.value:
            return BookingOutcome(reservation=reservation)

        reservation = await repository.cancel(reservation_id)
        await db.commit()
        logger.info(f"Cancelled reservation {reservation_id}")
        self.events.publish(ReservationEvent.CANCELLED, reservation)
        return BookingOutcome(reservation=reservation)


# Singleton instance
booking_service = BookingService()
