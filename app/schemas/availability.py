"""Availability schemas."""
from enum import Enum
from pydantic import BaseModel
from typing import Optional, List
import datetime as dt
from decimal import Decimal


class SlotStatus(str, Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    BLOCKED = "blocked"
    PAST = "past"


class AvailabilitySlot(BaseModel):
    """Schema for a single availability slot."""

    court_id: int
    court_name: str
    date: dt.date
    time: dt.time
    end_time: dt.time
    available: bool
    status: SlotStatus
    reservation_id: Optional[str] = None
    price: Decimal


class TimeSlotGroup(BaseModel):
    """All courts' slots starting at the same time of day."""

    time: dt.time
    end_time: dt.time
    available_courts: int
    slots: List[AvailabilitySlot]


class AvailabilityResponse(BaseModel):
    """Schema for availability response."""

    date: dt.date
    court_id: Optional[int] = None
    blocked: bool
    total_slots: int
    available_slots: int
    slots: List[AvailabilitySlot]
    by_time: List[TimeSlotGroup]


class SlotCheckRequest(BaseModel):
    """Schema for checking a single slot."""

    date: dt.date
    start_time: dt.time
    court_id: int


class SlotCheckResult(BaseModel):
    """Schema for the result of a single slot check."""

    available: bool
    reason: Optional[str] = None
    price: Optional[Decimal] = None
