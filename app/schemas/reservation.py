"""Reservation schemas."""
from enum import Enum
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
import datetime as dt
from decimal import Decimal


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PAID = "paid"
    CANCELLED = "cancelled"


class ReservationOrigin(str, Enum):
    WEB = "web"
    ADMIN = "admin"
    WHATSAPP = "whatsapp"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Customer(BaseModel):
    """Customer details stored with a reservation."""

    name: str
    phone: str
    email: Optional[str] = None
    document_id: Optional[str] = None


class CustomerDraft(BaseModel):
    """Customer details as submitted; completeness is checked by the validator."""

    name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    email: Optional[EmailStr] = None
    document_id: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ReservationDraft(BaseModel):
    """A prospective reservation, possibly incomplete."""

    court_id: Optional[int] = None
    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    customer: CustomerDraft = CustomerDraft()


class ReservationCreate(ReservationDraft):
    """Schema for creating a reservation from the admin panel."""

    price: Optional[Decimal] = Field(default=None, ge=0)
    status: ReservationStatus = ReservationStatus.PENDING
    origin: ReservationOrigin = ReservationOrigin.ADMIN
    notes: Optional[str] = Field(default=None, max_length=500)


class PublicReservationCreate(ReservationDraft):
    """Schema for a booking submitted from the public site.

    Any client-side price is ignored; the server always quotes it.
    """

    notes: Optional[str] = Field(default=None, max_length=500)


class ReservationUpdate(BaseModel):
    """Schema for updating a reservation."""

    court_id: Optional[int] = None
    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    customer: Optional[CustomerDraft] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    origin: Optional[ReservationOrigin] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus


class ReservationInDB(BaseModel):
    """Schema for reservation from database."""

    id: str
    court_id: int
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    customer: Customer
    price: Decimal
    status: ReservationStatus
    origin: ReservationOrigin
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ReservationFilters(BaseModel):
    """Filters accepted by the reservation query."""

    date: Optional[dt.date] = None
    court_id: Optional[int] = None
    status: Optional[ReservationStatus] = None
    search: Optional[str] = None
    order: SortOrder = SortOrder.DESC
