"""Public site schemas."""
from pydantic import BaseModel
from typing import List
from datetime import time
from decimal import Decimal

from app.schemas.configuration import FacilityInfo
from app.schemas.court import PublicCourt


class PublicPrices(BaseModel):
    base: Decimal
    normal: Decimal
    night: Decimal
    weekend: Decimal


class PublicInfo(BaseModel):
    """Everything the public site needs to render the facility."""

    facility: FacilityInfo
    opening_time: time
    closing_time: time
    slot_duration: int
    currency: str
    currency_symbol: str
    prices: PublicPrices
    courts: List[PublicCourt]
    court_count: int
