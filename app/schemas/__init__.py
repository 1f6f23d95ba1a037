"""API schemas."""
from app.schemas.configuration import (
    Configuration,
    ConfigurationUpdate,
)
from app.schemas.court import (
    CourtCreate,
    CourtUpdate,
    CourtInDB,
    PublicCourt,
)
from app.schemas.reservation import (
    ReservationCreate,
    ReservationDraft,
    ReservationUpdate,
    ReservationInDB,
    ReservationFilters,
    ReservationStatus,
)
from app.schemas.availability import (
    AvailabilitySlot,
    AvailabilityResponse,
    SlotStatus,
    TimeSlotGroup,
)
from app.schemas.stats import BookingStats

__all__ = [
    "Configuration",
    "ConfigurationUpdate",
    "CourtCreate",
    "CourtUpdate",
    "CourtInDB",
    "PublicCourt",
    "ReservationCreate",
    "ReservationDraft",
    "ReservationUpdate",
    "ReservationInDB",
    "ReservationFilters",
    "ReservationStatus",
    "AvailabilitySlot",
    "AvailabilityResponse",
    "SlotStatus",
    "TimeSlotGroup",
    "BookingStats",
]
