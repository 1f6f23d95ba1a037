"""Court registry."""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BookingIssue, ErrorKind
from app.models.court import Court
from app.schemas.court import CourtCreate, CourtUpdate
from app.services.reservation_repository import ReservationRepository

logger = logging.getLogger(__name__)


class CourtRegistry:
    """Bookable courts and their per-court price overrides."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, active_only: bool = False) -> List[Court]:
        stmt = select(Court).order_by(Court.order, Court.id)
        if active_only:
            stmt = stmt.where(Court.active == True)  # noqa: E712
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get(self, court_id: int) -> Optional[Court]:
        result = await self.db.execute(select(Court).where(Court.id == court_id))
        return result.scalar_one_or_none()

    async def create(self, court: CourtCreate) -> Court:
        db_court = Court(**court.model_dump(mode="python"))
        if hasattr(db_court.type, "value"):
            db_court.type = db_court.type.value
        self.db.add(db_court)
        await self.db.commit()
        await self.db.refresh(db_court)
        logger.info(f"Created court {db_court.name} ({db_court.id})")
        return db_court

    async def update(self, court_id: int, court_update: CourtUpdate) -> Optional[Court]:
        court = await self.get(court_id)
        if not court:
            return None

        update_data = court_update.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(court, field, value.value if hasattr(value, "value") else value)

        await self.db.commit()
        await self.db.refresh(court)
        return court

    async def delete(self, court_id: int, today: date) -> List[BookingIssue]:
        """
        Remove a court from the registry.

        Rejected while the court has reservations from ``today`` onwards that
        are not cancelled. On success the court's remaining history is
        removed with it.

        Returns:
            Empty list on success, otherwise the reasons it was rejected
        """
        court = await self.get(court_id)
        if not court:
            return [BookingIssue(kind=ErrorKind.NOT_FOUND, message=f"Court {court_id} not found")]

        reservations = ReservationRepository(self.db)
        outstanding = await reservations.count_future_active(court_id, today)
        if outstanding:
            logger.warning(
                f"Refusing to delete court {court_id}: {outstanding} upcoming reservation(s)"
            )
            return [
                BookingIssue(
                    kind=ErrorKind.CONSTRAINT,
                    message=(
                        f"Court {court.name} has {outstanding} upcoming reservation(s); "
                        "cancel them or deactivate the court instead"
                    ),
                )
            ]

        await reservations.purge_court(court_id)
        await self.db.delete(court)
        await self.db.commit()
        logger.info(f"Deleted court {court.name} ({court_id})")
        return []
