from __future__ import annotations

import pytest

from backend.domain import registry
from backend.domain.errors import ConflictError, ValidationError
from backend.domain.models import ApplicationState, Room


def _room(room_id: int, **overrides) -> Room:
    values = {
        "id": room_id,
        "hostel_type": "Boys",
        "hostel_number": 1,
        "seater": 2,
        "room_number": str(100 + room_id),
        "price": 1000,
        "is_available": True,
    }
    values.update(overrides)
    return Room(**values)


def _fields(**overrides) -> dict:
    fields = {
        "hostelType": "Boys",
        "hostelNumber": 1,
        "seater": 2,
        "roomNumber": "999",
        "price": 1800,
    }
    fields.update(overrides)
    return fields


def test_find_by_id_returns_match_or_none() -> None:
    rooms = (_room(1), _room(5))
    assert registry.find_by_id(rooms, 5) == rooms[1]
    assert registry.find_by_id(rooms, 2) is None


def test_is_duplicate_coerces_types() -> None:
    rooms = (_room(1, hostel_number=3, room_number="12"),)
    assert registry.is_duplicate(rooms, "Boys", "3", 12)
    assert not registry.is_duplicate(rooms, "Girls", 3, "12")
    assert not registry.is_duplicate(rooms, "Boys", 4, "12")


def test_filter_requires_all_three_criteria() -> None:
    rooms = (
        _room(1, hostel_type="Boys", hostel_number=2, seater=3),
        _room(2, hostel_type="Boys", hostel_number=2, seater=4),
        _room(3, hostel_type="Girls", hostel_number=2, seater=3),
        _room(4, hostel_type="Boys", hostel_number=1, seater=3),
    )
    matched = registry.filter_by_criteria(rooms, " Boys ", 2, 3)
    assert [room.id for room in matched] == [1]


def test_sort_by_price_is_stable_and_non_mutating() -> None:
    rooms = [
        _room(1, price=3000),
        _room(2, price=1000),
        _room(3, price=2000),
        _room(4, price=1000),
    ]
    original = list(rooms)
    ordered = registry.sort_by_price_ascending(rooms)
    assert [room.id for room in ordered] == [2, 4, 3, 1]
    assert rooms == original


def test_create_room_assigns_id_one_when_empty() -> None:
    state, room = registry.create_room(ApplicationState(), _fields())
    assert room.id == 1
    assert room.is_available is True
    assert state.rooms == (room,)


def test_create_room_assigns_max_plus_one() -> None:
    state = ApplicationState(rooms=(_room(7), _room(3)))
    new_state, room = registry.create_room(state, _fields())
    assert room.id == 8
    assert new_state.rooms[-1] == room
    assert len(state.rooms) == 2


def test_create_room_duplicate_conflicts_regardless_of_price_and_seater() -> None:
    state, _ = registry.create_room(ApplicationState(), _fields())
    with pytest.raises(ConflictError):
        registry.create_room(state, _fields(price=5, seater=6))


def test_create_room_duplicate_detected_after_trimming() -> None:
    state, _ = registry.create_room(ApplicationState(), _fields(roomNumber="A1"))
    with pytest.raises(ConflictError):
        registry.create_room(state, _fields(roomNumber=" A1 "))


def test_create_room_rejects_invalid_fields() -> None:
    with pytest.raises(ValidationError):
        registry.create_room(ApplicationState(), _fields(price=-10))
