"""Repository layer responsible for all access to the JSON state file."""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import replace
from pathlib import Path
from threading import RLock
from typing import Optional

from backend.domain.models import ApplicationState, Room
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


DEMO_ROOMS = (
    ("Boys", 1, 2, "101", 2000),
    ("Boys", 1, 3, "102", 1500),
    ("Boys", 2, 3, "201", 1600),
    ("Girls", 1, 2, "101", 2200),
    ("Girls", 1, 1, "102", 3000),
    ("Girls", 2, 4, "201", 1200),
)


class DataRepository:
    """Loads and saves the whole application state as one JSON document.

    The repository is the only component that touches the file. It holds a
    re-entrant lock that services take around each load/save cycle.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._data_path = Path(self._settings.data_file_path)
        self._lock = RLock()

    @property
    def data_path(self) -> Path:
        return self._data_path

    @property
    def lock(self) -> RLock:
        return self._lock

    def initialize_storage(self) -> None:
        """Create an empty state file if none exists yet."""
        with self._lock:
            if self._data_path.exists():
                return
            self._data_path.parent.mkdir(parents=True, exist_ok=True)
            if not self.save(ApplicationState()):
                raise RuntimeError(f"Could not create data file at {self._data_path}")
            logger.info("Created empty data file at %s", self._data_path)

    def load(self) -> ApplicationState:
        """Read the state file, failing open to an empty state."""
        try:
            raw = self._data_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Data file %s is missing; using empty state", self._data_path)
            return ApplicationState()
        except OSError as exc:
            logger.error("Error reading data file %s: %s", self._data_path, exc)
            return ApplicationState()

        try:
            payload = json.loads(raw)
            if not isinstance(payload, dict):
                raise ValueError("top-level JSON value is not an object")
            return ApplicationState.from_dict(payload)
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("Error parsing data file %s: %s", self._data_path, exc)
            return ApplicationState()

    def save(self, state: ApplicationState) -> bool:
        """Overwrite the state file; return False if the write failed."""
        temp_path: Optional[str] = None
        try:
            serialized = json.dumps(
                state.to_dict(), indent=2, ensure_ascii=False, allow_nan=False
            )
            self._data_path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self._data_path.parent,
                prefix=f".{self._data_path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(serialized)
            os.replace(temp_path, self._data_path)
            return True
        except (OSError, ValueError) as exc:
            logger.error("Error writing data file %s: %s", self._data_path, exc)
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
            return False

    def seed_demo_rooms_if_empty(self) -> int:
        """Seed a fixed demo inventory only when no rooms exist."""
        with self._lock:
            state = self.load()
            if state.rooms:
                logger.info("Rooms already present; skipping demo seed")
                return 0

            rooms = tuple(
                Room(
                    id=index,
                    hostel_type=hostel_type,
                    hostel_number=hostel_number,
                    seater=seater,
                    room_number=room_number,
                    price=price,
                )
                for index, (hostel_type, hostel_number, seater, room_number, price)
                in enumerate(DEMO_ROOMS, start=1)
            )
            if not self.save(replace(state, rooms=rooms)):
                raise RuntimeError("Demo room seeding failed: could not write data file")
            logger.info("Seeded %s demo rooms", len(rooms))
            return len(rooms)
