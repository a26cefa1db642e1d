"""Domain models for rooms, bookings, the waiting queue and booking history."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Union


Number = Union[int, float]


def as_number(value: Any) -> Number:
    """Coerce to a JSON-style number: integral values become ``int``."""
    number = float(value)
    if number.is_integer():
        return int(number)
    return number


def utc_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    current = moment or datetime.now(timezone.utc)
    return current.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


@dataclass(frozen=True)
class Room:
    id: int
    hostel_type: str
    hostel_number: int
    seater: int
    room_number: str
    price: Number
    is_available: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "hostelType": self.hostel_type,
            "hostelNumber": self.hostel_number,
            "seater": self.seater,
            "roomNumber": self.room_number,
            "price": self.price,
            "isAvailable": self.is_available,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Room":
        return cls(
            id=int(payload["id"]),
            hostel_type=str(payload["hostelType"]),
            hostel_number=int(payload["hostelNumber"]),
            seater=int(payload["seater"]),
            room_number=str(payload["roomNumber"]),
            price=as_number(payload["price"]),
            is_available=bool(payload.get("isAvailable", True)),
        )


@dataclass(frozen=True)
class Booking:
    """An occupancy of a room; history entries share this shape."""

    booking_id: int
    room_id: int
    room_number: str
    hostel_type: str
    hostel_number: int
    price: Number
    user_name: str
    booked_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "bookingId": self.booking_id,
            "roomId": self.room_id,
            "roomNumber": self.room_number,
            "hostelType": self.hostel_type,
            "hostelNumber": self.hostel_number,
            "price": self.price,
            "userName": self.user_name,
            "bookedAt": self.booked_at,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Booking":
        return cls(
            booking_id=int(payload["bookingId"]),
            room_id=int(payload["roomId"]),
            room_number=str(payload["roomNumber"]),
            hostel_type=str(payload["hostelType"]),
            hostel_number=int(payload["hostelNumber"]),
            price=as_number(payload["price"]),
            user_name=str(payload["userName"]),
            booked_at=str(payload["bookedAt"]),
        )

    @classmethod
    def for_room(
        cls,
        room: Room,
        *,
        booking_id: int,
        user_name: str,
        booked_at: str,
    ) -> "Booking":
        return cls(
            booking_id=booking_id,
            room_id=room.id,
            room_number=room.room_number,
            hostel_type=room.hostel_type,
            hostel_number=room.hostel_number,
            price=room.price,
            user_name=user_name,
            booked_at=booked_at,
        )


@dataclass(frozen=True)
class WaitingQueueEntry:
    room_id: int
    user_name: str
    requested_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "roomId": self.room_id,
            "userName": self.user_name,
            "requestedAt": self.requested_at,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "WaitingQueueEntry":
        return cls(
            room_id=int(payload["roomId"]),
            user_name=str(payload["userName"]),
            requested_at=str(payload["requestedAt"]),
        )


@dataclass(frozen=True)
class ApplicationState:
    """The whole persisted aggregate; replaced, never patched in place."""

    rooms: tuple[Room, ...] = field(default_factory=tuple)
    bookings: tuple[Booking, ...] = field(default_factory=tuple)
    waiting_queue: tuple[WaitingQueueEntry, ...] = field(default_factory=tuple)
    booking_history: tuple[Booking, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "rooms": [room.to_dict() for room in self.rooms],
            "bookings": [booking.to_dict() for booking in self.bookings],
            "waitingQueue": [entry.to_dict() for entry in self.waiting_queue],
            "bookingHistory": [entry.to_dict() for entry in self.booking_history],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ApplicationState":
        return cls(
            rooms=tuple(Room.from_dict(item) for item in payload.get("rooms") or []),
            bookings=tuple(
                Booking.from_dict(item) for item in payload.get("bookings") or []
            ),
            waiting_queue=tuple(
                WaitingQueueEntry.from_dict(item)
                for item in payload.get("waitingQueue") or []
            ),
            booking_history=tuple(
                Booking.from_dict(item) for item in payload.get("bookingHistory") or []
            ),
        )


@dataclass(frozen=True)
class BookingOutcome:
    """Either a confirmed booking or a 1-based waiting-queue position."""

    booking: Booking | None = None
    queue_position: int | None = None

    @property
    def queued(self) -> bool:
        return self.booking is None


@dataclass(frozen=True)
class CancellationOutcome:
    cancelled: Booking
    assigned: Booking | None = None


@dataclass(frozen=True)
class HistorySummary:
    total_bookings: int
    total_spent: Number
    most_booked_room: str | None
