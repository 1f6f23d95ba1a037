"""Court endpoints."""
from datetime import datetime
from typing import Callable, List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock
from app.core.database import get_db
from app.core.exceptions import issues_to_http
from app.schemas.court import CourtCreate, CourtInDB, CourtUpdate
from app.services.configuration_store import ConfigurationStore
from app.services.court_registry import CourtRegistry
from app.services.timeslots import facility_now

router = APIRouter(prefix="/courts", tags=["courts"])


@router.get("", response_model=List[CourtInDB])
async def list_courts(
    active_only: bool = Query(default=False, description="Only courts open for booking"),
    db: AsyncSession = Depends(get_db),
):
    """
    List courts in display order.

    Args:
        active_only: Skip inactive courts
        db: Database session

    Returns:
        List of courts
    """
    return await CourtRegistry(db).list(active_only=active_only)


@router.post("", response_model=CourtInDB, status_code=201)
async def create_court(
    court: CourtCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new court."""
    return await CourtRegistry(db).create(court)


@router.get("/{court_id}", response_model=CourtInDB)
async def get_court(
    court_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific court by ID."""
    court = await CourtRegistry(db).get(court_id)

    if not court:
        raise HTTPException(status_code=404, detail="Court not found")

    return court


@router.patch("/{court_id}", response_model=CourtInDB)
async def update_court(
    court_id: int,
    court_update: CourtUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Update a court's information.

    Args:
        court_id: Court ID
        court_update: Fields to update
        db: Database session

    Returns:
        Updated court
    """
    court = await CourtRegistry(db).update(court_id, court_update)

    if not court:
        raise HTTPException(status_code=404, detail="Court not found")

    return court


@router.delete("/{court_id}", status_code=204)
async def delete_court(
    court_id: int,
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Delete a court.

    Rejected with 409 while the court has upcoming reservations that are not
    cancelled.

    Args:
        court_id: Court ID
        db: Database session
        clock: Current time provider
    """
    config = await ConfigurationStore(db).get()
    today = facility_now(config.regional.timezone, clock()).date()

    errors = await CourtRegistry(db).delete(court_id, today)
    if errors:
        raise issues_to_http(errors, "Court cannot be deleted")
