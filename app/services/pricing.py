"""Tiered slot pricing."""
from datetime import date, time as dt_time
from decimal import Decimal
from typing import Optional

from app.core.config import settings
from app.models.court import Court
from app.schemas.configuration import Configuration

SATURDAY = 5
SUNDAY = 6


def _first_price(*candidates: Optional[Decimal]) -> Optional[Decimal]:
    for candidate in candidates:
        if candidate:
            return Decimal(candidate)
    return None


class PricingEngine:
    """
    Maps (date, start time, court) to a price.

    Rules are evaluated in a fixed order and the first match wins:
    night (start hour at or after the night threshold), then weekend
    (Saturday/Sunday), then normal. Each tier prefers the court's override,
    then the facility tier price, then the facility base price.
    """

    def __init__(self, config: Configuration, night_start_hour: Optional[int] = None):
        self.config = config
        self.night_start_hour = (
            settings.NIGHT_START_HOUR if night_start_hour is None else night_start_hour
        )

    def tier(self, day: date, start_time: dt_time) -> str:
        if start_time.hour >= self.night_start_hour:
            return "night"
        if day.weekday() in (SATURDAY, SUNDAY):
            return "weekend"
        return "normal"

    def price(self, day: date, start_time: dt_time, court: Optional[Court] = None) -> Decimal:
        return self.effective_prices(court)[self.tier(day, start_time)]

    def effective_prices(self, court: Optional[Court] = None) -> dict:
        """Per-tier price a court actually charges, used for public listings."""
        result = {}
        for tier in ("normal", "night", "weekend"):
            override = getattr(court, f"price_{tier}", None) if court is not None else None
            result[tier] = _first_price(
                override, getattr(self.config.prices, tier), self.config.base_price
            ) or Decimal("0")
        return result
