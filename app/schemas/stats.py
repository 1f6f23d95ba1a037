"""Statistics schemas."""
from enum import Enum
from pydantic import BaseModel
from typing import List
from datetime import date
from decimal import Decimal


class StatsPeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class PopularHour(BaseModel):
    time: str
    count: int


class CourtOccupancy(BaseModel):
    court_id: int
    court_name: str
    reservations: int
    available_slots: int
    occupancy_percentage: float


class BookingStats(BaseModel):
    """Schema for reservation statistics over a period."""

    period: StatsPeriod
    from_date: date
    to_date: date
    total_reservations: int
    pending: int
    confirmed: int
    paid: int
    cancelled: int
    estimated_revenue: Decimal
    popular_hours: List[PopularHour]
    occupancy: List[CourtOccupancy]
