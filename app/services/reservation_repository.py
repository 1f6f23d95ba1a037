"""Reservation persistence."""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.reservation import Reservation
from app.schemas.reservation import ReservationFilters, ReservationStatus, SortOrder

logger = logging.getLogger(__name__)

CUSTOMER_COLUMNS = {
    "name": "customer_name",
    "phone": "customer_phone",
    "email": "customer_email",
    "document_id": "customer_document",
}


def _flatten(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Map API-shaped fields (nested ``customer``) onto model columns."""
    data = dict(fields)
    customer = data.pop("customer", None) or {}
    for key, value in customer.items():
        data[CUSTOMER_COLUMNS[key]] = value
    for key in ("status", "origin"):
        if hasattr(data.get(key), "value"):
            data[key] = data[key].value
    return data


class ReservationRepository:
    """
    Create, read, update and query reservations.

    The repository never validates. Callers run the booking validator first
    and only then persist.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, fields: Dict[str, Any]) -> Reservation:
        """
        Persist a new reservation and return it with id and timestamps.

        Args:
            fields: Reservation fields; ``customer`` may be given nested

        Returns:
            The stored reservation
        """
        reservation = Reservation(**_flatten(fields))
        self.db.add(reservation)
        await self.db.flush()
        await self.db.refresh(reservation)
        return reservation

    async def get_by_id(self, reservation_id: str) -> Optional[Reservation]:
        result = await self.db.execute(
            select(Reservation).where(Reservation.id == reservation_id)
        )
        return result.scalar_one_or_none()

    async def update(self, reservation_id: str, fields: Dict[str, Any]) -> Optional[Reservation]:
        """
        Merge fields into an existing reservation and re-stamp ``updated_at``.

        Returns None when the reservation does not exist.
        """
        reservation = await self.get_by_id(reservation_id)
        if reservation is None:
            return None

        for field, value in _flatten(fields).items():
            setattr(reservation, field, value)
        reservation.updated_at = func.now()

        await self.db.flush()
        await self.db.refresh(reservation)
        return reservation

    async def cancel(self, reservation_id: str) -> Optional[Reservation]:
        """Soft-cancel a reservation. Cancelling twice is a no-op."""
        reservation = await self.get_by_id(reservation_id)
        if reservation is None:
            return None
        if reservation.status == ReservationStatus.CANCELLED.value:
            return reservation
        return await self.update(reservation_id, {"status": ReservationStatus.CANCELLED})

    async def query(self, filters: Optional[ReservationFilters] = None) -> List[Reservation]:
        """
        List reservations matching the given filters.

        Free-text search matches customer name, phone or email.
        """
        filters = filters or ReservationFilters()
        stmt = select(Reservation)

        if filters.date is not None:
            stmt = stmt.where(Reservation.date == filters.date)
        if filters.court_id is not None:
            stmt = stmt.where(Reservation.court_id == filters.court_id)
        if filters.status is not None:
            stmt = stmt.where(Reservation.status == filters.status.value)
        if filters.search:
            term = f"%{filters.search.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Reservation.customer_name).like(term),
                    Reservation.customer_phone.like(term),
                    func.lower(Reservation.customer_email).like(term),
                )
            )

        if filters.order == SortOrder.ASC:
            stmt = stmt.order_by(Reservation.date.asc(), Reservation.start_time.asc())
        else:
            stmt = stmt.order_by(Reservation.date.desc(), Reservation.start_time.desc())

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def active_for(self, court_id: int, day: date) -> List[Reservation]:
        """Non-cancelled reservations on one court for one date."""
        result = await self.db.execute(
            select(Reservation)
            .where(
                and_(
                    Reservation.court_id == court_id,
                    Reservation.date == day,
                    Reservation.status != ReservationStatus.CANCELLED.value,
                )
            )
            .order_by(Reservation.start_time)
        )
        return list(result.scalars().all())

    async def active_on(self, day: date) -> List[Reservation]:
        """Non-cancelled reservations on every court for one date."""
        result = await self.db.execute(
            select(Reservation)
            .where(
                and_(
                    Reservation.date == day,
                    Reservation.status != ReservationStatus.CANCELLED.value,
                )
            )
            .order_by(Reservation.court_id, Reservation.start_time)
        )
        return list(result.scalars().all())

    async def in_range(self, from_date: date, to_date: date) -> List[Reservation]:
        result = await self.db.execute(
            select(Reservation).where(
                and_(Reservation.date >= from_date, Reservation.date <= to_date)
            )
        )
        return list(result.scalars().all())

    async def count_future_active(self, court_id: int, today: date) -> int:
        result = await self.db.execute(
            select(func.count(Reservation.id)).where(
                and_(
                    Reservation.court_id == court_id,
                    Reservation.date >= today,
                    Reservation.status != ReservationStatus.CANCELLED.value,
                )
            )
        )
        return result.scalar_one()

    async def purge_court(self, court_id: int) -> int:
        """Hard-delete a removed court's remaining (past or cancelled) history."""
        result = await self.db.execute(
            delete(Reservation).where(Reservation.court_id == court_id)
        )
        logger.info(f"Purged {result.rowcount} reservation(s) of court {court_id}")
        return result.rowcount
