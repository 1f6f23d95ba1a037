"""Wall-clock helpers shared by pricing, availability and validation.

All dates are facility-local calendar dates and all times facility-local
wall-clock times. Nothing here converts through UTC; the only timezone-aware
step is ``facility_now``, which turns the real clock into a naive local
datetime once.
"""
from datetime import date, datetime, time as dt_time
from typing import Iterator, Optional, Tuple

import pytz


def to_minutes(value: dt_time) -> int:
    """Minutes since midnight."""
    return value.hour * 60 + value.minute


def from_minutes(minutes: int) -> dt_time:
    """Inverse of ``to_minutes``; clamps to the last minute of the day."""
    minutes = max(0, min(minutes, 24 * 60 - 1))
    return dt_time(hour=minutes // 60, minute=minutes % 60)


def format_range(start: dt_time, end: dt_time) -> str:
    return f"{start:%H:%M} - {end:%H:%M}"


def overlaps(
    a_start: dt_time, a_end: dt_time, b_start: dt_time, b_end: dt_time
) -> bool:
    """Half-open interval overlap: [a_start, a_end) and [b_start, b_end)."""
    return a_start < b_end and b_start < a_end


def iter_slots(
    opening: dt_time, closing: dt_time, duration: int
) -> Iterator[Tuple[dt_time, dt_time]]:
    """
    Yield (start, end) for every slot between opening and closing.

    A slot's end is capped at closing when the duration does not divide the
    opening window evenly.
    """
    close_minutes = to_minutes(closing)
    minutes = to_minutes(opening)
    while minutes < close_minutes:
        yield from_minutes(minutes), from_minutes(min(minutes + duration, close_minutes))
        minutes += duration


def facility_now(timezone_name: str, now: Optional[datetime] = None) -> datetime:
    """
    Current facility-local wall-clock time as a naive datetime.

    An aware ``now`` is converted to the facility timezone; a naive one is
    assumed to already be facility-local.
    """
    if now is None:
        now = datetime.now(pytz.UTC)
    if now.tzinfo is None:
        return now
    return now.astimezone(pytz.timezone(timezone_name)).replace(tzinfo=None)


def slot_start(day: date, start: dt_time) -> datetime:
    return datetime.combine(day, start)
