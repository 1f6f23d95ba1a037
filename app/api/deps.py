"""Shared endpoint dependencies."""
from datetime import datetime
from typing import Callable

import pytz


def get_clock() -> Callable[[], datetime]:
    """Return the clock used for past-date and past-slot checks (UTC, aware)."""
    return lambda: datetime.now(pytz.UTC)
