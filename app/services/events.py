"""Reservation change notifications."""
import logging
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class ReservationEvent(str, Enum):
    CREATED = "reservation.created"
    UPDATED = "reservation.updated"
    CANCELLED = "reservation.cancelled"


Listener = Callable[[ReservationEvent, object], None]


class ReservationEvents:
    """
    Observer registry for reservation changes.

    Listeners run synchronously after the change is committed. A failing
    listener is logged and does not affect the booking or other listeners.
    """

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: ReservationEvent, reservation) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, reservation)
            except Exception as e:
                logger.error(f"Listener failed for {event.value}: {e}", exc_info=True)


def log_reservation_event(event: ReservationEvent, reservation) -> None:
    logger.info(
        f"{event.value}: {reservation.id} court={reservation.court_id} "
        f"date={reservation.date} {reservation.start_time:%H:%M}-{reservation.end_time:%H:%M} "
        f"status={reservation.status}"
    )


# Singleton instance
reservation_events = ReservationEvents()
