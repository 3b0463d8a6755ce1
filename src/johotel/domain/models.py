"""Domain records shared by the admission engine and its stores."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class RoomCategory(str, Enum):
    """Closed set of room categories. Values match the rooms.category column."""

    STANDARD = "Standard"
    FAMILY = "Family"
    SUITE = "Suite"

    @classmethod
    def parse(cls, value: str) -> RoomCategory:
        """Case-insensitive lookup; raises ValueError for unknown categories."""
        normalized = value.strip().lower()
        for category in cls:
            if category.value.lower() == normalized:
                return category
        raise ValueError(f"Unknown room category: {value!r}")


@dataclass(frozen=True)
class Room:
    id: int
    room_number: int
    category: RoomCategory


@dataclass(frozen=True)
class NewReservation:
    """A reservation about to be inserted (no id or timestamps yet)."""

    user_id: int
    room_id: int
    check_in: datetime
    check_out: datetime
    confirmed: bool = True


@dataclass(frozen=True)
class Reservation:
    id: int
    user_id: int
    room_id: int
    check_in: datetime
    check_out: datetime
    confirmed: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AdmittedReservation:
    """Outcome of a successful admission, with fields derived for callers."""

    reservation: Reservation
    room_number: int
    room_category: RoomCategory
    nights: int
    total_price: Decimal
    currency: str = "DKK"

    def to_dict(self) -> dict:
        r = self.reservation
        return {
            "id": r.id,
            "user_id": r.user_id,
            "room_id": r.room_id,
            "room_number": self.room_number,
            "room_category": self.room_category.value,
            "check_in": r.check_in.isoformat(),
            "check_out": r.check_out.isoformat(),
            "confirmed": r.confirmed,
            "nights": self.nights,
            "total_price": str(self.total_price),
            "currency": self.currency,
            "created_at": r.created_at.isoformat(),
        }
