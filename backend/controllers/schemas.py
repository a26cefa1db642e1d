"""Request and response DTOs shared by the controllers.

Fields are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from backend.domain.models import Booking, Room, WaitingQueueEntry


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AddRoomRequest(CamelModel):
    """Every field is optional here so that missing values reach domain validation."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    hostel_type: Optional[str] = None
    hostel_number: Optional[int] = None
    seater: Optional[int] = None
    room_number: Optional[str] = None
    price: Optional[float] = None


class BookRoomRequest(CamelModel):
    user_name: Optional[str] = None


class RoomResponse(CamelModel):
    id: int
    hostel_type: str
    hostel_number: int
    seater: int = Field(ge=1)
    room_number: str
    price: Union[int, float]
    is_available: bool

    @classmethod
    def from_domain(cls, room: Room) -> "RoomResponse":
        return cls.model_validate(room.to_dict())


class BookingResponse(CamelModel):
    booking_id: int
    room_id: int
    room_number: str
    hostel_type: str
    hostel_number: int
    price: Union[int, float]
    user_name: str
    booked_at: str

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingResponse":
        return cls.model_validate(booking.to_dict())


class WaitingQueueEntryResponse(CamelModel):
    room_id: int
    user_name: str
    requested_at: str

    @classmethod
    def from_domain(cls, entry: WaitingQueueEntry) -> "WaitingQueueEntryResponse":
        return cls.model_validate(entry.to_dict())


class BookRoomResponse(CamelModel):
    message: str
    booking: Optional[BookingResponse] = None
    queue_position: Optional[int] = Field(default=None, ge=1)


class CancelBookingResponse(CamelModel):
    message: str
    cancelled: BookingResponse
    assigned_from_queue: Optional[BookingResponse] = None


class RemoveRoomResponse(CamelModel):
    message: str
    room: RoomResponse


class HistorySummaryResponse(CamelModel):
    total_bookings: int = Field(ge=0)
    total_spent: Union[int, float]
    most_booked_room: Optional[str] = None
