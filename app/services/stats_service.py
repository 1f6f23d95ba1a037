"""Reservation statistics."""
import calendar
import logging
from collections import Counter
from datetime import date, timedelta
from decimal import Decimal
from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.reservation import ReservationStatus
from app.schemas.stats import BookingStats, CourtOccupancy, PopularHour, StatsPeriod
from app.services.configuration_store import ConfigurationStore
from app.services.court_registry import CourtRegistry
from app.services.reservation_repository import ReservationRepository
from app.services.timeslots import iter_slots

logger = logging.getLogger(__name__)

REVENUE_STATUSES = {ReservationStatus.CONFIRMED.value, ReservationStatus.PAID.value}


def period_bounds(period: StatsPeriod, day: date) -> Tuple[date, date]:
    """First and last date of the period containing ``day``. Weeks start on Monday."""
    if period == StatsPeriod.WEEK:
        start = day - timedelta(days=day.weekday())
        return start, start + timedelta(days=6)
    if period == StatsPeriod.MONTH:
        last_day = calendar.monthrange(day.year, day.month)[1]
        return day.replace(day=1), day.replace(day=last_day)
    return day, day


class StatsService:
    """Service for reservation statistics."""

    async def get_stats(
        self, db: AsyncSession, period: StatsPeriod, day: date
    ) -> BookingStats:
        """
        Get statistics for the period containing a date.

        Args:
            db: Database session
            period: day, week or month
            day: Any date inside the period

        Returns:
            Totals per status, revenue, popular hours and per-court occupancy
        """
        from_date, to_date = period_bounds(period, day)
        config = await ConfigurationStore(db).get()
        courts = await CourtRegistry(db).list()
        reservations = await ReservationRepository(db).in_range(from_date, to_date)

        by_status = Counter(r.status for r in reservations)
        active = [r for r in reservations if r.status != ReservationStatus.CANCELLED.value]

        revenue = sum(
            (Decimal(r.price) for r in reservations if r.status in REVENUE_STATUSES),
            Decimal("0"),
        )

        hours = Counter(f"{r.start_time:%H:%M}" for r in active)
        popular = [
            PopularHour(time=t, count=c)
            for t, c in sorted(hours.items(), key=lambda item: (-item[1], item[0]))[:5]
        ]

        days = (to_date - from_date).days + 1
        slots_per_day = sum(
            1 for _ in iter_slots(config.opening_time, config.closing_time, config.slot_duration)
        )
        slots_per_court = days * slots_per_day
        per_court = Counter(r.court_id for r in active)

        occupancy = []
        for court in courts:
            booked = per_court.get(court.id, 0)
            percentage = (booked / slots_per_court * 100) if slots_per_court > 0 else 0
            occupancy.append(
                CourtOccupancy(
                    court_id=court.id,
                    court_name=court.name,
                    reservations=booked,
                    available_slots=slots_per_court,
                    occupancy_percentage=round(percentage, 2),
                )
            )

        logger.debug(f"Computed {period.value} stats for {from_date}..{to_date}")

        return BookingStats(
            period=period,
            from_date=from_date,
            to_date=to_date,
            total_reservations=len(reservations),
            pending=by_status.get(ReservationStatus.PENDING.value, 0),
            confirmed=by_status.get(ReservationStatus.CONFIRMED.value, 0),
            paid=by_status.get(ReservationStatus.PAID.value, 0),
            cancelled=by_status.get(ReservationStatus.CANCELLED.value, 0),
            estimated_revenue=revenue,
            popular_hours=popular,
            occupancy=occupancy,
        )


# Singleton instance
stats_service = StatsService()
