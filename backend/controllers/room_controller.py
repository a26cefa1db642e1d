"""HTTP controller layer for the room inventory."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend.controllers.dependencies import get_room_service, parse_room_id
from backend.controllers.schemas import AddRoomRequest, RemoveRoomResponse, RoomResponse
from backend.domain.errors import ConflictError, NotFoundError, StorageError, ValidationError
from backend.services.room_service import RoomInventoryService


router = APIRouter(tags=["rooms"])


@router.get("/rooms", response_model=list[RoomResponse])
async def list_rooms(
    service: RoomInventoryService = Depends(get_room_service),
) -> list[RoomResponse]:
    return [RoomResponse.from_domain(room) for room in service.list_rooms()]


@router.get("/rooms/sorted", response_model=list[RoomResponse])
async def list_rooms_sorted(
    service: RoomInventoryService = Depends(get_room_service),
) -> list[RoomResponse]:
    """Rooms ordered by ascending price; equal prices keep stored order."""
    return [RoomResponse.from_domain(room) for room in service.list_rooms_sorted_by_price()]


@router.get("/rooms/filter", response_model=list[RoomResponse])
async def filter_rooms(
    hostel_type: Optional[str] = Query(default=None, alias="hostelType"),
    hostel_number: Optional[str] = Query(default=None, alias="hostelNumber"),
    seater: Optional[str] = Query(default=None),
    service: RoomInventoryService = Depends(get_room_service),
) -> list[RoomResponse]:
    """Exact match on all three criteria."""
    if not hostel_type or not hostel_number or not seater:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query params required: hostelType, hostelNumber, seater",
        )
    try:
        hostel_number_value = float(hostel_number)
        seater_value = float(seater)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="hostelNumber and seater must be numbers",
        ) from exc

    rooms = service.filter_rooms(hostel_type, hostel_number_value, seater_value)
    return [RoomResponse.from_domain(room) for room in rooms]


@router.post(
    "/add-room",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_room(
    payload: AddRoomRequest,
    service: RoomInventoryService = Depends(get_room_service),
) -> RoomResponse:
    try:
        room = service.add_room(payload.model_dump(by_alias=True))
        return RoomResponse.from_domain(room)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except ConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except StorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc


@router.delete("/rooms/{room_id}", response_model=RemoveRoomResponse)
async def remove_room(
    room_id: str,
    service: RoomInventoryService = Depends(get_room_service),
) -> RemoveRoomResponse:
    """Withdraw an available room; its waiting-queue entries are dropped."""
    parsed_room_id = parse_room_id(room_id)
    try:
        room = service.remove_room(parsed_room_id)
        return RemoveRoomResponse(message="Room removed", room=RoomResponse.from_domain(room))
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except ConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except StorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
