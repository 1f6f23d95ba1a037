"""Facility configuration schemas."""
import re
from datetime import date, time
from decimal import Decimal
from typing import List, Optional

import pytz
from pydantic import BaseModel, Field, field_validator, model_validator

# Spanish mobile/landline format: +34 XXX XXX XXX (first digit 6-9) with optional separators
DEFAULT_PHONE_PATTERN = r"^(\+?34)?[\s\-]?([6789][0-9]{2})[\s\-]?([0-9]{3})[\s\-]?([0-9]{3})$"


class PriceTiers(BaseModel):
    """Facility-wide price per slot for each tier."""

    normal: Decimal = Field(default=Decimal("40"), ge=0)
    night: Decimal = Field(default=Decimal("48"), ge=0)
    weekend: Decimal = Field(default=Decimal("50"), ge=0)


class FacilityInfo(BaseModel):
    """Public facility metadata."""

    name: str = "Invasor Fútbol 5"
    address: str = "Madrid, España"
    phone: str = "+34 600 111 222"
    whatsapp: str = "34600111222"
    instagram: str = "canchafutbol5"
    maps_url: str = "https://maps.google.com/?q=Invasor+Futbol+5+Madrid+Espana"
    maps_embed: str = "https://www.google.com/maps?q=Madrid,+Espa%C3%B1a&output=embed"


class RegionalSettings(BaseModel):
    """Locale, currency, timezone and phone format of the deployment."""

    country: str = "España"
    locale: str = "es-ES"
    currency: str = "EUR"
    currency_symbol: str = "€"
    timezone: str = "Europe/Madrid"
    phone_pattern: str = DEFAULT_PHONE_PATTERN

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {value}")
        return value

    @field_validator("phone_pattern")
    @classmethod
    def _compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid phone pattern: {e}")
        return value


class Configuration(BaseModel):
    """The facility configuration read by every scheduling computation."""

    opening_time: time = time(8, 0)
    closing_time: time = time(23, 0)
    slot_duration: int = Field(default=60, ge=5, le=720)
    base_price: Decimal = Field(default=Decimal("40"), ge=0)
    prices: PriceTiers = PriceTiers()
    blocked_dates: List[date] = []
    facility: FacilityInfo = FacilityInfo()
    regional: RegionalSettings = RegionalSettings()

    @model_validator(mode="after")
    def _opening_before_closing(self) -> "Configuration":
        if self.opening_time >= self.closing_time:
            raise ValueError("opening_time must be before closing_time")
        return self

    def is_blocked(self, day: date) -> bool:
        return day in self.blocked_dates


class PriceTiersUpdate(BaseModel):
    normal: Optional[Decimal] = Field(default=None, ge=0)
    night: Optional[Decimal] = Field(default=None, ge=0)
    weekend: Optional[Decimal] = Field(default=None, ge=0)


class FacilityInfoUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    instagram: Optional[str] = None
    maps_url: Optional[str] = None
    maps_embed: Optional[str] = None


class RegionalSettingsUpdate(BaseModel):
    country: Optional[str] = None
    locale: Optional[str] = None
    currency: Optional[str] = None
    currency_symbol: Optional[str] = None
    timezone: Optional[str] = None
    phone_pattern: Optional[str] = None


class ConfigurationUpdate(BaseModel):
    """Partial configuration; nested objects are merged field by field."""

    opening_time: Optional[time] = None
    closing_time: Optional[time] = None
    slot_duration: Optional[int] = Field(default=None, ge=5, le=720)
    base_price: Optional[Decimal] = Field(default=None, ge=0)
    prices: Optional[PriceTiersUpdate] = None
    blocked_dates: Optional[List[date]] = None
    facility: Optional[FacilityInfoUpdate] = None
    regional: Optional[RegionalSettingsUpdate] = None
