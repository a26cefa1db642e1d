"""Domain-level validation rules for new rooms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from backend.domain.errors import ValidationError
from backend.domain.models import Number, as_number


REQUIRED_ROOM_FIELDS = ("hostelType", "hostelNumber", "seater", "roomNumber", "price")


@dataclass(frozen=True)
class RoomFields:
    hostel_type: str
    hostel_number: int
    seater: int
    room_number: str
    price: Number


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _to_int(value: Any, name: str) -> int:
    try:
        number = as_number(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be a number") from exc
    if not isinstance(number, int):
        raise ValidationError(f"{name} must be a whole number")
    return number


def validate_room_fields(fields: Mapping[str, Any]) -> RoomFields:
    """Check presence and ranges, returning the normalized field values."""
    if any(_is_blank(fields.get(name)) for name in REQUIRED_ROOM_FIELDS):
        raise ValidationError(
            "hostelType, hostelNumber, seater, roomNumber and price are required"
        )

    try:
        price = as_number(fields["price"])
    except (TypeError, ValueError) as exc:
        raise ValidationError("Price must be a non-negative number") from exc
    if not math.isfinite(price) or price < 0:
        raise ValidationError("Price must be a non-negative number")

    seater = _to_int(fields["seater"], "Seater")
    if seater < 1:
        raise ValidationError("Seater must be at least 1")

    return RoomFields(
        hostel_type=str(fields["hostelType"]).strip(),
        hostel_number=_to_int(fields["hostelNumber"], "hostelNumber"),
        seater=seater,
        room_number=str(fields["roomNumber"]).strip(),
        price=price,
    )
