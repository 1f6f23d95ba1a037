"""Database models."""
from app.models.court import Court
from app.models.reservation import Reservation
from app.models.facility_settings import FacilitySettings

__all__ = ["Court", "Reservation", "FacilitySettings"]
