"""Reservation endpoints."""
from datetime import date, datetime
from typing import Callable, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock
from app.core.database import get_db
from app.core.exceptions import issues_to_http
from app.schemas.reservation import (
    ReservationCreate,
    ReservationDraft,
    ReservationFilters,
    ReservationInDB,
    ReservationStatus,
    ReservationStatusUpdate,
    ReservationUpdate,
    SortOrder,
)
from app.services.booking_service import booking_service
from app.services.reservation_repository import ReservationRepository

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.get("", response_model=List[ReservationInDB])
async def list_reservations(
    date: Optional[date] = Query(default=None, description="Only this date"),
    court_id: Optional[int] = Query(default=None, description="Only this court"),
    status: Optional[ReservationStatus] = Query(default=None, description="Only this status"),
    search: Optional[str] = Query(default=None, description="Customer name, phone or email"),
    order: SortOrder = Query(default=SortOrder.DESC, description="Sort by date and start time"),
    db: AsyncSession = Depends(get_db),
):
    """
    List reservations.

    Args:
        date: Date filter
        court_id: Court filter
        status: Status filter
        search: Free-text customer search
        order: asc or desc by (date, start time)
        db: Database session

    Returns:
        Matching reservations
    """
    filters = ReservationFilters(
        date=date, court_id=court_id, status=status, search=search, order=order
    )
    return await ReservationRepository(db).query(filters)


@router.post("", response_model=ReservationInDB, status_code=201)
async def create_reservation(
    reservation: ReservationCreate,
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Create a reservation from the admin panel.

    The price is quoted from the pricing rules when omitted and stored as
    given otherwise. All validation problems are returned together.

    Args:
        reservation: Reservation data
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
        price=reservation.price,
        status=reservation.status,
        origin=reservation.origin,
        notes=reservation.notes,
        now=clock(),
    )
    if not outcome.ok:
        raise issues_to_http(outcome.errors, "Reservation is not valid")
    return outcome.reservation


@router.get("/{reservation_id}", response_model=ReservationInDB)
async def get_reservation(
    reservation_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific reservation by ID."""
    reservation = await ReservationRepository(db).get_by_id(reservation_id)

    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    return reservation


@router.patch("/{reservation_id}", response_model=ReservationInDB)
async def update_reservation(
    reservation_id: str,
    reservation_update: ReservationUpdate,
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Update a reservation.

    Changing court, date, times or customer re-validates the reservation
    against every other booking.

    Args:
        reservation_id: Reservation ID
        reservation_update: Fields to update
        db: Database session
        clock: Current time provider

    Returns:
        Updated reservation
    """
    outcome = await booking_service.update_reservation(
        db, reservation_id, reservation_update, now=clock()
    )
    if not outcome.ok:
        raise issues_to_http(outcome.errors, "Reservation update is not valid")
    return outcome.reservation


@router.patch("/{reservation_id}/status", response_model=ReservationInDB)
async def update_reservation_status(
    reservation_id: str,
    status_update: ReservationStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Change a reservation's status. Cancelled reservations cannot be reactivated."""
    outcome = await booking_service.update_status(db, reservation_id, status_update.status)
    if not outcome.ok:
        raise issues_to_http(outcome.errors, "Status change is not allowed")
    return outcome.reservation


@router.delete("/{reservation_id}", response_model=ReservationInDB)
async def cancel_reservation(
    reservation_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Cancel a reservation.

    The record is kept with status ``cancelled``; cancelling twice is a no-op.
    """
    outcome = await booking_service.cancel_reservation(db, reservation_id)
    if not outcome.ok:
        raise issues_to_http(outcome.errors, "Reservation not found")
    return outcome.reservation
