"""Reservation admission - decide whether a stay may be booked, then book it.

Runs inside a single store session that holds the room's admission lock:
lock room → room exists → overlap check → price → insert.

Holding the lock for the whole sequence closes the window between the
overlap check and the insert, so two conflicting requests for the same room
cannot both be admitted.
"""

from __future__ import annotations

from datetime import datetime

from johotel.domain.errors import (
    InvalidStayError,
    ReservationNotFoundError,
    ReservationOverlapError,
)
from johotel.domain.models import AdmittedReservation, NewReservation
from johotel.domain.pricing import nights_between, price_for_stay
from johotel.domain.store import ReservationStore
from johotel.observability.logging import get_logger

logger = get_logger(__name__)


def _require_aware(name: str, value: datetime) -> None:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be a timezone-aware UTC instant")


def create_reservation(
    store: ReservationStore,
    *,
    user_id: int,
    room_id: int,
    check_in: datetime,
    check_out: datetime,
) -> AdmittedReservation:
    """Admit and persist a confirmed reservation.

    The caller is expected to pass check_in < check_out, both normalized to
    UTC. No timezone conversion happens here.

    Returns:
        The persisted reservation with nights, room details and total price.

    Raises:
        ValueError: If either instant is naive.
        ReservationNotFoundError: If the room does not exist.
        ReservationOverlapError: If a confirmed reservation overlaps the interval.
        InvalidStayError: If the stay spans no calendar nights.
    """
    _require_aware("check_in", check_in)
    _require_aware("check_out", check_out)

    with store.session(lock_room=room_id) as session:
        room = session.get_room(room_id)
        if room is None:
            raise ReservationNotFoundError(f"Room {room_id} not found")

        if session.exists_overlap(room_id, check_in, check_out):
            raise ReservationOverlapError(room_id)

        total_price = price_for_stay(room.category, check_in, check_out)
        if total_price is None:
            raise InvalidStayError(
                f"Stay from {check_in.isoformat()} to {check_out.isoformat()} has no nights"
            )

        reservation = session.insert(
            NewReservation(
                user_id=user_id,
                room_id=room_id,
                check_in=check_in,
                check_out=check_out,
                confirmed=True,
            )
        )

    logger.info(
        "reservation admitted",
        extra={
            "extra_fields": {
                "reservation_id": reservation.id,
                "room_id": room_id,
                "check_in": check_in.isoformat(),
                "check_out": check_out.isoformat(),
            },
        },
    )

    return AdmittedReservation(
        reservation=reservation,
        room_number=room.room_number,
        room_category=room.category,
        nights=nights_between(check_in, check_out),
        total_price=total_price,
    )
