"""Booking workflows: book or queue, cancel with queue promotion."""

from __future__ import annotations

from typing import Callable, Optional

from backend.domain import engine
from backend.domain.errors import StorageError
from backend.domain.models import (
    Booking,
    BookingOutcome,
    CancellationOutcome,
    WaitingQueueEntry,
    utc_timestamp,
)
from backend.repository.data_repository import DataRepository
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class BookingService:
    """Runs the booking engine against persisted state, one load/save per call."""

    def __init__(
        self,
        repository: Optional[DataRepository] = None,
        settings: Optional[Settings] = None,
        booking_id_factory: Optional[engine.BookingIdFactory] = None,
        clock: Optional[Callable[[], str]] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)
        self._next_booking_id = booking_id_factory or engine.BookingIdGenerator()
        self._clock = clock or utc_timestamp

    def resolve_user_name(self, user_name: Optional[str]) -> str:
        name = (user_name or "").strip()
        return name or self._settings.default_guest_name

    def book_room(self, room_id: int, user_name: Optional[str] = None) -> BookingOutcome:
        name = self.resolve_user_name(user_name)
        with self._repository.lock:
            state, outcome = engine.book(
                self._repository.load(),
                room_id,
                name,
                now=self._clock(),
                next_booking_id=self._next_booking_id,
            )
            if not self._repository.save(state):
                raise StorageError("Failed to save booking")

        if outcome.booking is not None:
            logger.info(
                "Booked room id=%s for %s (booking %s)",
                room_id,
                name,
                outcome.booking.booking_id,
            )
        else:
            logger.info(
                "Room id=%s unavailable; queued %s at position %s",
                room_id,
                name,
                outcome.queue_position,
            )
        return outcome

    def cancel_booking(self, booking_id: int) -> CancellationOutcome:
        with self._repository.lock:
            state, outcome = engine.cancel(
                self._repository.load(),
                booking_id,
                now=self._clock(),
                next_booking_id=self._next_booking_id,
            )
            if not self._repository.save(state):
                raise StorageError("Failed to update data")

        logger.info("Cancelled booking %s", booking_id)
        if outcome.assigned is not None:
            logger.info(
                "Room id=%s reassigned from queue to %s (booking %s)",
                outcome.assigned.room_id,
                outcome.assigned.user_name,
                outcome.assigned.booking_id,
            )
        return outcome

    def list_bookings(self) -> list[Booking]:
        return list(self._repository.load().bookings)

    def list_waiting_queue(self) -> list[WaitingQueueEntry]:
        return list(self._repository.load().waiting_queue)
