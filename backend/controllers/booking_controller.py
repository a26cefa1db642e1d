"""HTTP controller layer for bookings, the waiting queue and booking history."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from backend.controllers.dependencies import (
    get_booking_service,
    get_history_service,
    parse_booking_id,
    parse_room_id,
)
from backend.controllers.schemas import (
    BookingResponse,
    BookRoomRequest,
    BookRoomResponse,
    CancelBookingResponse,
    HistorySummaryResponse,
    WaitingQueueEntryResponse,
)
from backend.domain.errors import NotFoundError, StorageError
from backend.services.booking_service import BookingService
from backend.services.history_service import HistoryService


router = APIRouter(tags=["bookings"])


@router.get("/bookings", response_model=list[BookingResponse])
async def list_bookings(
    service: BookingService = Depends(get_booking_service),
) -> list[BookingResponse]:
    return [BookingResponse.from_domain(booking) for booking in service.list_bookings()]


@router.get("/waiting-queue", response_model=list[WaitingQueueEntryResponse])
async def list_waiting_queue(
    service: BookingService = Depends(get_booking_service),
) -> list[WaitingQueueEntryResponse]:
    """Queue entries in insertion order."""
    return [
        WaitingQueueEntryResponse.from_domain(entry)
        for entry in service.list_waiting_queue()
    ]


@router.get("/history", response_model=list[BookingResponse])
async def list_history(
    search: Optional[str] = None,
    service: HistoryService = Depends(get_history_service),
) -> list[BookingResponse]:
    """Every booking ever made, newest first."""
    return [BookingResponse.from_domain(entry) for entry in service.list_history(search)]


@router.get("/history/summary", response_model=HistorySummaryResponse)
async def history_summary(
    service: HistoryService = Depends(get_history_service),
) -> HistorySummaryResponse:
    summary = service.summarize()
    return HistorySummaryResponse(
        total_bookings=summary.total_bookings,
        total_spent=summary.total_spent,
        most_booked_room=summary.most_booked_room,
    )


@router.post(
    "/book/{room_id}",
    response_model=BookRoomResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def book_room(
    room_id: str,
    response: Response,
    payload: Optional[BookRoomRequest] = Body(default=None),
    service: BookingService = Depends(get_booking_service),
) -> BookRoomResponse:
    """Book an available room, or join its waiting queue (200 instead of 201)."""
    parsed_room_id = parse_room_id(room_id)
    user_name = payload.user_name if payload is not None else None
    try:
        outcome = service.book_room(parsed_room_id, user_name)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except StorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    if outcome.booking is None:
        response.status_code = status.HTTP_200_OK
        return BookRoomResponse(
            message="Room is not available. You have been added to the waiting queue.",
            queue_position=outcome.queue_position,
        )
    return BookRoomResponse(
        message="Room booked successfully",
        booking=BookingResponse.from_domain(outcome.booking),
    )


@router.delete("/cancel/{booking_id}", response_model=CancelBookingResponse)
async def cancel_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> CancelBookingResponse:
    """Cancel a booking and reassign the room to the first queued user, if any."""
    parsed_booking_id = parse_booking_id(booking_id)
    try:
        outcome = service.cancel_booking(parsed_booking_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except StorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return CancelBookingResponse(
        message="Booking cancelled",
        cancelled=BookingResponse.from_domain(outcome.cancelled),
        assigned_from_queue=(
            BookingResponse.from_domain(outcome.assigned)
            if outcome.assigned is not None
            else None
        ),
    )
