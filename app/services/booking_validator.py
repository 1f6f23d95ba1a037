"""Booking validation and conflict detection."""
import logging
import re
from datetime import datetime
from typing import Iterable, List, Optional

from app.core.exceptions import BookingIssue, ErrorKind, ValidationResult
from app.schemas.configuration import Configuration
from app.schemas.reservation import ReservationDraft, ReservationStatus
from app.services.timeslots import format_range, overlaps

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    ("court_id", "Court is required"),
    ("date", "Date is required"),
    ("start_time", "Start time is required"),
    ("end_time", "End time is required"),
    ("customer.name", "Customer name is required"),
    ("customer.phone", "Customer phone is required"),
)


def _field_value(draft: ReservationDraft, path: str):
    value = draft
    for part in path.split("."):
        value = getattr(value, part, None)
    if isinstance(value, str):
        value = value.strip()
    return value


class BookingValidator:
    """Read-only checks run before a reservation is created or changed."""

    def __init__(self, config: Configuration):
        self.config = config
        self._phone_re = re.compile(config.regional.phone_pattern)

    def missing_fields(self, draft: ReservationDraft) -> List[BookingIssue]:
        return [
            BookingIssue(kind=ErrorKind.MISSING_FIELD, field=path, message=message)
            for path, message in REQUIRED_FIELDS
            if not _field_value(draft, path)
        ]

    def check_phone(self, phone: str) -> List[BookingIssue]:
        if self._phone_re.match(phone.strip()):
            return []
        return [
            BookingIssue(
                kind=ErrorKind.INVALID_PHONE,
                field="customer.phone",
                message=f"Phone number '{phone}' is not valid for {self.config.regional.country}",
            )
        ]

    def check_not_past(self, draft: ReservationDraft, now: datetime) -> List[BookingIssue]:
        if draft.date < now.date():
            return [
                BookingIssue(
                    kind=ErrorKind.PAST_DATE,
                    field="date",
                    message="Date must be today or later",
                )
            ]
        if draft.date == now.date() and draft.start_time < now.time():
            return [
                BookingIssue(
                    kind=ErrorKind.PAST_DATE,
                    field="start_time",
                    message=f"{draft.start_time:%H:%M} has already passed today",
                )
            ]
        return []

    def check_hours(self, draft: ReservationDraft) -> List[BookingIssue]:
        errors = []
        opening = self.config.opening_time
        closing = self.config.closing_time

        if draft.start_time < opening:
            errors.append(
                BookingIssue(
                    kind=ErrorKind.OUTSIDE_HOURS,
                    field="start_time",
                    message=f"Start time must be at or after {opening:%H:%M}",
                )
            )
        if draft.end_time > closing:
            errors.append(
                BookingIssue(
                    kind=ErrorKind.OUTSIDE_HOURS,
                    field="end_time",
                    message=f"End time must be at or before {closing:%H:%M}",
                )
            )
        if draft.start_time >= draft.end_time:
            errors.append(
                BookingIssue(
                    kind=ErrorKind.INVALID_TIME_RANGE,
                    field="end_time",
                    message="Start time must be before end time",
                )
            )
        return errors

    def find_conflicts(
        self,
        draft: ReservationDraft,
        existing: Iterable,
        exclude_reservation_id: Optional[str] = None,
    ) -> List[BookingIssue]:
        """
        Report every non-cancelled reservation on the same court and date
        whose interval overlaps the draft's.
        """
        conflicts = []
        for reservation in existing:
            if reservation.id == exclude_reservation_id:
                continue
            if reservation.court_id != draft.court_id or reservation.date != draft.date:
                continue
            if reservation.status == ReservationStatus.CANCELLED.value:
                continue
            if overlaps(
                draft.start_time, draft.end_time,
                reservation.start_time, reservation.end_time,
            ):
                conflicts.append(
                    BookingIssue(
                        kind=ErrorKind.CONFLICT,
                        message=(
                            "Court is already booked "
                            f"{format_range(reservation.start_time, reservation.end_time)}"
                        ),
                    )
                )
        return conflicts

    def validate(
        self,
        draft: ReservationDraft,
        existing: Iterable,
        now: datetime,
        exclude_reservation_id: Optional[str] = None,
    ) -> ValidationResult:
        """
        Run every check and collect all problems.

        Missing required fields short-circuit the remaining checks, since
        they depend on those fields.

        Args:
            draft: Reservation being created or changed
            existing: Reservations to check for conflicts
            now: Facility-local naive datetime
            exclude_reservation_id: Reservation being updated, if any
        """
        missing = self.missing_fields(draft)
        if missing:
            return ValidationResult.from_errors(missing)

        errors: List[BookingIssue] = []
        errors.extend(self.check_phone(draft.customer.phone))
        errors.extend(self.check_not_past(draft, now))
        errors.extend(self.check_hours(draft))

        if self.config.is_blocked(draft.date):
            errors.append(
                BookingIssue(
                    kind=ErrorKind.BLOCKED_DAY,
                    field="date",
                    message=f"{draft.date.isoformat()} is blocked for bookings",
                )
            )

        errors.extend(self.find_conflicts(draft, existing, exclude_reservation_id))

        if errors:
            logger.debug(f"Reservation draft rejected with {len(errors)} error(s)")
        return ValidationResult.from_errors(errors)
