"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

import re

from fastapi import HTTPException, Request, status

from backend.repository.data_repository import DataRepository
from backend.services.booking_service import BookingService
from backend.services.history_service import HistoryService
from backend.services.room_service import RoomInventoryService
from backend.utils.config import get_settings


# ASCII digits only, no underscores.
_PLAIN_INTEGER = re.compile(r"-?[0-9]+")


def _get_repository(request: Request) -> DataRepository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        repository = DataRepository(get_settings())
        request.app.state.repository = repository
    return repository


def get_room_service(request: Request) -> RoomInventoryService:
    service = getattr(request.app.state, "room_service", None)
    if service is None:
        service = RoomInventoryService(
            repository=_get_repository(request),
            settings=get_settings(),
        )
        request.app.state.room_service = service
    return service


def get_booking_service(request: Request) -> BookingService:
    service = getattr(request.app.state, "booking_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Booking service is not initialized",
        )
    return service


def get_history_service(request: Request) -> HistoryService:
    service = getattr(request.app.state, "history_service", None)
    if service is None:
        service = HistoryService(
            repository=_get_repository(request),
            settings=get_settings(),
        )
        request.app.state.history_service = service
    return service


def _parse_path_int(raw: str, detail: str) -> int:
    text = raw.strip()
    if not _PLAIN_INTEGER.fullmatch(text):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    return int(text)


def parse_room_id(raw: str) -> int:
    return _parse_path_int(raw, "Invalid room ID")


def parse_booking_id(raw: str) -> int:
    booking_id = _parse_path_int(raw, "Invalid booking ID")
    if booking_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid booking ID",
        )
    return booking_id
