"""Court schemas."""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class CourtType(str, Enum):
    INDOOR = "indoor"
    GRASS = "grass"
    TURF = "turf"


class CourtBase(BaseModel):
    """Base court schema."""

    name: str = Field(..., min_length=1, max_length=100)
    type: CourtType = CourtType.INDOOR
    active: bool = True
    capacity: int = Field(default=10, ge=1)
    description: Optional[str] = None
    features: Optional[List[str]] = None
    image: Optional[str] = None
    price_normal: Optional[Decimal] = Field(default=None, ge=0)
    price_night: Optional[Decimal] = Field(default=None, ge=0)
    price_weekend: Optional[Decimal] = Field(default=None, ge=0)
    order: int = 0


class CourtCreate(CourtBase):
    """Schema for creating a court."""

    pass


class CourtUpdate(BaseModel):
    """Schema for updating a court."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    type: Optional[CourtType] = None
    active: Optional[bool] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    description: Optional[str] = None
    features: Optional[List[str]] = None
    image: Optional[str] = None
    price_normal: Optional[Decimal] = Field(default=None, ge=0)
    price_night: Optional[Decimal] = Field(default=None, ge=0)
    price_weekend: Optional[Decimal] = Field(default=None, ge=0)
    order: Optional[int] = None


class CourtInDB(CourtBase):
    """Schema for court from database."""

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PublicCourt(BaseModel):
    """Court as shown on the public site, with effective prices."""

    id: int
    name: str
    type: CourtType
    capacity: int
    description: Optional[str] = None
    features: Optional[List[str]] = None
    price_normal: Decimal
    price_night: Decimal
    price_weekend: Decimal
