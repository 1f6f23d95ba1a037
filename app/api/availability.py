"""Availability endpoints."""
from datetime import date, datetime
from typing import Callable, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock
from app.core.database import get_db
from app.schemas.availability import AvailabilityResponse
from app.services.availability_service import availability_service

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("", response_model=AvailabilityResponse)
async def get_availability(
    date: date = Query(..., description="Facility-local date (YYYY-MM-DD)"),
    court_id: Optional[int] = Query(default=None, description="Restrict to one court"),
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Get slot availability for a date.

    Every slot between opening and closing time is listed with its price and
    whether it can still be booked. Without ``court_id`` all active courts
    are included and also grouped by time of day.

    Args:
        date: Date to inspect
        court_id: Optional court ID
        db: Database session
        clock: Current time provider

    Returns:
        Availability data
    """
    try:
        return await availability_service.get_availability(db, date, court_id, now=clock())
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
