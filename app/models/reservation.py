"""Reservation model."""
import uuid

from sqlalchemy import Column, Date, DateTime, Index, Integer, Numeric, String, Text, Time
from sqlalchemy.sql import func
from app.core.database import Base


def _new_reservation_id() -> str:
    return str(uuid.uuid4())


class Reservation(Base):
    """A booked interval on one court for one facility-local date."""

    __tablename__ = "reservations"

    id = Column(String(36), primary_key=True, default=_new_reservation_id)
    court_id = Column(Integer, nullable=False, index=True)  # looked up by id, no FK
    date = Column(Date, nullable=False, index=True)  # Facility-local calendar date
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    customer_email = Column(String, nullable=True)
    customer_document = Column(String, nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    status = Column(String, nullable=False, default="pending")  # pending, confirmed, paid, cancelled
    origin = Column(String, nullable=False, default="admin")  # web, admin, whatsapp
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("ix_reservations_court_date", "court_id", "date"),
        Index("ix_reservations_date_start", "date", "start_time"),
    )

    @property
    def customer(self) -> dict:
        return {
            "name": self.customer_name,
            "phone": self.customer_phone,
            "email": self.customer_email,
            "document_id": self.customer_document,
        }

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id}, court={self.court_id}, date={self.date}, "
            f"{self.start_time:%H:%M}-{self.end_time:%H:%M}, status={self.status})>"
        )
