"""Room registry: lookup, duplicate detection, filtering, sorting and creation.

All functions are pure. They take the current rooms (or state) and never
mutate it; ``create_room`` returns a new ``ApplicationState``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from backend.domain.constraints import validate_room_fields
from backend.domain.errors import ConflictError
from backend.domain.models import ApplicationState, Room


def find_by_id(rooms: Sequence[Room], room_id: int) -> Optional[Room]:
    for room in rooms:
        if room.id == room_id:
            return room
    return None


def is_duplicate(
    rooms: Sequence[Room],
    hostel_type: Any,
    hostel_number: Any,
    room_number: Any,
) -> bool:
    """True iff a room already occupies the (type, number, room number) slot."""
    type_key = str(hostel_type)
    number_key = float(hostel_number)
    room_key = str(room_number)
    for room in rooms:
        if (
            room.hostel_type == type_key
            and float(room.hostel_number) == number_key
            and room.room_number == room_key
        ):
            return True
    return False


def filter_by_criteria(
    rooms: Sequence[Room],
    hostel_type: Any,
    hostel_number: Any,
    seater: Any,
) -> list[Room]:
    """Exact match on all three criteria; no partial or fuzzy matching."""
    type_key = str(hostel_type or "").strip()
    number_key = float(hostel_number)
    seater_key = float(seater)
    return [
        room
        for room in rooms
        if room.hostel_type == type_key
        and float(room.hostel_number) == number_key
        and float(room.seater) == seater_key
    ]


def sort_by_price_ascending(rooms: Sequence[Room]) -> list[Room]:
    # sorted() is stable, so equal prices keep their stored order.
    return sorted(rooms, key=lambda room: room.price)


def next_room_id(rooms: Sequence[Room]) -> int:
    return max((room.id for room in rooms), default=0) + 1


def create_room(
    state: ApplicationState,
    fields: Mapping[str, Any],
) -> tuple[ApplicationState, Room]:
    """Validate ``fields`` (camelCase keys) and append a new available room."""
    values = validate_room_fields(fields)
    if is_duplicate(state.rooms, values.hostel_type, values.hostel_number, values.room_number):
        raise ConflictError(
            "A room with the same hostelType, hostelNumber, and roomNumber already exists"
        )

    room = Room(
        id=next_room_id(state.rooms),
        hostel_type=values.hostel_type,
        hostel_number=values.hostel_number,
        seater=values.seater,
        room_number=values.room_number,
        price=values.price,
        is_available=True,
    )
    return replace(state, rooms=state.rooms + (room,)), room
