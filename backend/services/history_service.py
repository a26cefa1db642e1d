"""Read-only views over the append-only booking history."""

from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from backend.domain.models import Booking, HistorySummary, as_number
from backend.repository.data_repository import DataRepository
from backend.utils.config import Settings, get_settings


def room_label(booking: Booking) -> str:
    """Room numbers repeat across hostels, so the label names the hostel too."""
    return f"{booking.hostel_type} {booking.hostel_number}/{booking.room_number}"


def summarize_history(history: Sequence[Booking]) -> HistorySummary:
    """Totals plus the most frequently booked room.

    Ties on frequency go to the room that was booked first.
    """
    if not history:
        return HistorySummary(total_bookings=0, total_spent=0, most_booked_room=None)

    counts = Counter(entry.room_id for entry in history)
    first_seen: dict[int, Booking] = {}
    for entry in history:
        first_seen.setdefault(entry.room_id, entry)
    top_room_id = max(first_seen, key=lambda room_id: counts[room_id])

    return HistorySummary(
        total_bookings=len(history),
        total_spent=as_number(sum(entry.price for entry in history)),
        most_booked_room=room_label(first_seen[top_room_id]),
    )


class HistoryService:
    def __init__(
        self,
        repository: Optional[DataRepository] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)

    def list_history(self, search: Optional[str] = None) -> list[Booking]:
        """Newest first, optionally narrowed by room number or user name."""
        newest_first = list(reversed(self._repository.load().booking_history))
        needle = (search or "").strip().lower()
        if not needle:
            return newest_first
        return [
            entry
            for entry in newest_first
            if needle in entry.room_number.lower() or needle in entry.user_name.lower()
        ]

    def summarize(self) -> HistorySummary:
        return summarize_history(self._repository.load().booking_history)
