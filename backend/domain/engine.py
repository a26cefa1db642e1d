"""Booking engine: book, cancel with FIFO promotion, and room withdrawal.

Per-room state machine::

    Available --book--> Booked --cancel--> Available
                          ^                   |
                          +-- queue promote --+

Every function takes an ``ApplicationState`` and returns a new one together
with its result, so nothing is written until the caller persists it.
"""

from __future__ import annotations

import time
from dataclasses import replace
from threading import Lock
from typing import Callable, Optional

from backend.domain.errors import ConflictError, NotFoundError
from backend.domain.models import (
    ApplicationState,
    Booking,
    BookingOutcome,
    CancellationOutcome,
    Room,
    WaitingQueueEntry,
)
from backend.domain.registry import find_by_id


MAX_SAFE_INTEGER = 2**53 - 1

BookingIdFactory = Callable[[], int]


class BookingIdGenerator:
    """Time-derived booking ids, strictly increasing within one process.

    ``id = epoch_ms * 1000 + counter``: up to a thousand ids fit in one
    millisecond before the sequence borrows from the next one.
    """

    _COUNTER_SPAN = 1000

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.time
        self._last_id = 0
        self._lock = Lock()

    def __call__(self) -> int:
        with self._lock:
            candidate = int(self._clock() * 1000) * self._COUNTER_SPAN
            if candidate <= self._last_id:
                candidate = self._last_id + 1
            if candidate > MAX_SAFE_INTEGER:
                raise OverflowError("booking id exceeds the safe integer range")
            self._last_id = candidate
            return candidate


def _set_availability(
    rooms: tuple[Room, ...],
    room_id: int,
    is_available: bool,
) -> tuple[Room, ...]:
    return tuple(
        replace(room, is_available=is_available) if room.id == room_id else room
        for room in rooms
    )


def queue_position(waiting_queue: tuple[WaitingQueueEntry, ...], room_id: int) -> int:
    return sum(1 for entry in waiting_queue if entry.room_id == room_id)


def book(
    state: ApplicationState,
    room_id: int,
    user_name: str,
    *,
    now: str,
    next_booking_id: BookingIdFactory,
) -> tuple[ApplicationState, BookingOutcome]:
    room = find_by_id(state.rooms, room_id)
    if room is None:
        raise NotFoundError("Room not found")

    if room.is_available:
        booking = Booking.for_room(
            room,
            booking_id=next_booking_id(),
            user_name=user_name,
            booked_at=now,
        )
        new_state = replace(
            state,
            rooms=_set_availability(state.rooms, room.id, False),
            bookings=state.bookings + (booking,),
            booking_history=state.booking_history + (booking,),
        )
        return new_state, BookingOutcome(booking=booking)

    entry = WaitingQueueEntry(room_id=room.id, user_name=user_name, requested_at=now)
    waiting_queue = state.waiting_queue + (entry,)
    new_state = replace(state, waiting_queue=waiting_queue)
    return new_state, BookingOutcome(queue_position=queue_position(waiting_queue, room.id))


def cancel(
    state: ApplicationState,
    booking_id: int,
    *,
    now: str,
    next_booking_id: BookingIdFactory,
) -> tuple[ApplicationState, CancellationOutcome]:
    """Cancel a booking and hand the room to the earliest queued entrant."""
    index = next(
        (i for i, booking in enumerate(state.bookings) if booking.booking_id == booking_id),
        None,
    )
    if index is None:
        raise NotFoundError("Booking not found")

    cancelled = state.bookings[index]
    bookings = state.bookings[:index] + state.bookings[index + 1:]
    room = find_by_id(state.rooms, cancelled.room_id)
    if room is None:
        # Room withdrawn from inventory; nothing to free or promote.
        return replace(state, bookings=bookings), CancellationOutcome(cancelled=cancelled)

    rooms = _set_availability(state.rooms, room.id, True)
    queue_index = next(
        (i for i, entry in enumerate(state.waiting_queue) if entry.room_id == room.id),
        None,
    )
    if queue_index is None:
        new_state = replace(state, rooms=rooms, bookings=bookings)
        return new_state, CancellationOutcome(cancelled=cancelled)

    entrant = state.waiting_queue[queue_index]
    assigned = Booking.for_room(
        room,
        booking_id=next_booking_id(),
        user_name=entrant.user_name,
        booked_at=now,
    )
    new_state = replace(
        state,
        rooms=_set_availability(rooms, room.id, False),
        bookings=bookings + (assigned,),
        waiting_queue=state.waiting_queue[:queue_index] + state.waiting_queue[queue_index + 1:],
        booking_history=state.booking_history + (assigned,),
    )
    return new_state, CancellationOutcome(cancelled=cancelled, assigned=assigned)


def remove_room(state: ApplicationState, room_id: int) -> tuple[ApplicationState, Room]:
    """Withdraw an available room and drop any queue entries waiting on it."""
    room = find_by_id(state.rooms, room_id)
    if room is None:
        raise NotFoundError("Room not found")
    if not room.is_available:
        raise ConflictError(
            "Cannot delete a room that is currently booked. Cancel the booking first."
        )

    new_state = replace(
        state,
        rooms=tuple(item for item in state.rooms if item.id != room_id),
        waiting_queue=tuple(
            entry for entry in state.waiting_queue if entry.room_id != room_id
        ),
    )
    return new_state, room
