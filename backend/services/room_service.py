"""Room inventory workflows: listing, filtering, adding and withdrawing rooms."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from backend.domain import engine, registry
from backend.domain.errors import StorageError
from backend.domain.models import Room
from backend.repository.data_repository import DataRepository
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class RoomInventoryService:
    """Reads and mutates the room inventory through the repository."""

    def __init__(
        self,
        repository: Optional[DataRepository] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)

    def list_rooms(self) -> list[Room]:
        return list(self._repository.load().rooms)

    def list_rooms_sorted_by_price(self) -> list[Room]:
        return registry.sort_by_price_ascending(self._repository.load().rooms)

    def filter_rooms(self, hostel_type: str, hostel_number: float, seater: float) -> list[Room]:
        return registry.filter_by_criteria(
            self._repository.load().rooms,
            hostel_type,
            hostel_number,
            seater,
        )

    def add_room(self, fields: Mapping[str, Any]) -> Room:
        with self._repository.lock:
            state, room = registry.create_room(self._repository.load(), fields)
            if not self._repository.save(state):
                raise StorageError("Failed to save room")
        logger.info(
            "Added room id=%s (%s hostel %s, room %s)",
            room.id,
            room.hostel_type,
            room.hostel_number,
            room.room_number,
        )
        return room

    def remove_room(self, room_id: int) -> Room:
        with self._repository.lock:
            state, room = engine.remove_room(self._repository.load(), room_id)
            if not self._repository.save(state):
                raise StorageError("Failed to update data")
        logger.info("Removed room id=%s", room.id)
        return room
