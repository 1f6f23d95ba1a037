"""Statistics endpoints."""
from datetime import date, datetime
from typing import Callable, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock
from app.core.database import get_db
from app.schemas.stats import BookingStats, StatsPeriod
from app.services.configuration_store import ConfigurationStore
from app.services.stats_service import stats_service
from app.services.timeslots import facility_now

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=BookingStats)
async def get_stats(
    period: StatsPeriod = Query(default=StatsPeriod.DAY, description="day, week or month"),
    date: Optional[date] = Query(default=None, description="Any date in the period (defaults to today)"),
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Get reservation statistics.

    Args:
        period: Period length
        date: Reference date
        db: Database session
        clock: Current time provider

    Returns:
        Statistics for the period containing the date
    """
    if date is None:
        config = await ConfigurationStore(db).get()
        date = facility_now(config.regional.timezone, clock()).date()

    return await stats_service.get_stats(db, period, date)
