"""Shared builders for unit tests."""
from datetime import date, datetime, time
from types import SimpleNamespace

# Saturday afternoon, facility-local
FROZEN_NOW = datetime(2024, 6, 8, 15, 30)

MONDAY = date(2024, 6, 10)
SATURDAY = date(2024, 6, 8)

VALID_PHONE = "+34 600 123 456"


def make_court(court_id=1, name=None, active=True, **prices):
    """Court-like object for the pure engines."""
    return SimpleNamespace(
        id=court_id,
        name=name or f"Court {court_id}",
        active=active,
        price_normal=prices.get("price_normal"),
        price_night=prices.get("price_night"),
        price_weekend=prices.get("price_weekend"),
    )


def make_reservation(start, end, court_id=1, day=MONDAY, status="pending", reservation_id=None):
    """Reservation-like object for the pure engines; times as 'HH:MM'."""
    return SimpleNamespace(
        id=reservation_id or f"r-{court_id}-{start}",
        court_id=court_id,
        date=day,
        start_time=time.fromisoformat(start),
        end_time=time.fromisoformat(end),
        status=status,
    )
