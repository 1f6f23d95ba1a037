"""Public booking endpoints (no authentication)."""
from datetime import date, datetime
from typing import Callable, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock
from app.core.database import get_db
from app.core.exceptions import issues_to_http
from app.schemas.availability import AvailabilityResponse, SlotCheckRequest, SlotCheckResult
from app.schemas.court import PublicCourt
from app.schemas.public import PublicInfo, PublicPrices
from app.schemas.reservation import (
    PublicReservationCreate,
    ReservationDraft,
    ReservationInDB,
    ReservationOrigin,
    ReservationStatus,
)
from app.services.availability_service import availability_service
from app.services.booking_service import booking_service
from app.services.configuration_store import ConfigurationStore
from app.services.court_registry import CourtRegistry
from app.services.pricing import PricingEngine

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/info", response_model=PublicInfo)
async def get_public_info(
    db: AsyncSession = Depends(get_db),
):
    """
    Get public facility information.

    Includes contact details, opening hours, prices and the active courts
    with the prices each one actually charges.
    """
    config = await ConfigurationStore(db).get()
    courts = await CourtRegistry(db).list(active_only=True)
    pricing = PricingEngine(config)

    public_courts = []
    for court in courts:
        prices = pricing.effective_prices(court)
        public_courts.append(
            PublicCourt(
                id=court.id,
                name=court.name,
                type=court.type,
                capacity=court.capacity,
                description=court.description,
                features=court.features,
                price_normal=prices["normal"],
                price_night=prices["night"],
                price_weekend=prices["weekend"],
            )
        )

    return PublicInfo(
        facility=config.facility,
        opening_time=config.opening_time,
        closing_time=config.closing_time,
        slot_duration=config.slot_duration,
        currency=config.regional.currency,
        currency_symbol=config.regional.currency_symbol,
        prices=PublicPrices(
            base=config.base_price,
            normal=config.prices.normal,
            night=config.prices.night,
            weekend=config.prices.weekend,
        ),
        courts=public_courts,
        court_count=len(public_courts),
    )


@router.get("/availability", response_model=AvailabilityResponse)
async def get_public_availability(
    date: date = Query(..., description="Facility-local date (YYYY-MM-DD)"),
    court_id: Optional[int] = Query(default=None, description="Restrict to one court"),
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Get availability for the booking flow, grouped by time for all courts."""
    if court_id is not None:
        court = await CourtRegistry(db).get(court_id)
        if not court or not court.active:
            raise HTTPException(status_code=404, detail="Court not found")

    return await availability_service.get_availability(db, date, court_id, now=clock())


@router.post("/availability/check", response_model=SlotCheckResult)
async def check_slot(
    request: SlotCheckRequest,
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Check whether a single slot can still be booked."""
    return await availability_service.check_slot(
        db, request.date, request.start_time, request.court_id, now=clock()
    )


@router.post("/reservations", response_model=ReservationInDB, status_code=201)
async def create_public_reservation(
    reservation: PublicReservationCreate,
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Book a slot from the public site.

    Web bookings always start as ``pending`` and are always priced by the
    server.

    Args:
        reservation: Court, date, times, customer and notes
        db: Database session
        clock: Current time provider

    Returns:
        Created reservation
    """
    draft = ReservationDraft(
        **reservation.model_dump(include={"court_id", "date", "start_time", "end_time", "customer"})
    )
    outcome = await booking_service.create_reservation(
        db,
        draft,
        status=ReservationStatus.PENDING,
        origin=ReservationOrigin.WEB,
        notes=reservation.notes,
        now=clock(),
    )
    if not outcome.ok:
        raise issues_to_http(outcome.errors, "Booking could not be completed")
    return outcome.reservation
