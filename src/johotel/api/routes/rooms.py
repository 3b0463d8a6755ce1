"""Room pricing endpoint.

GET /rooms/{room_id}/quote: price a prospective stay without booking it.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import AwareDatetime

from johotel.api.dependencies import get_store
from johotel.domain.pricing import nights_between, price_for_stay
from johotel.domain.store import ReservationStore
from johotel.infra.time import to_utc

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("/{room_id}/quote")
def quote_stay(
    room_id: int = Path(..., ge=1),
    check_in: AwareDatetime = Query(...),
    check_out: AwareDatetime = Query(...),
    store: ReservationStore = Depends(get_store),
) -> dict:
    """Return the total price for the room's category over the stay.

    Unavailable stays carry a reason_code: "invalid_dates" when the stay has
    no calendar nights, "room_booked" when a confirmed reservation overlaps.
    Availability is a snapshot; only POST /bookings holds the room lock.
    """
    check_in = to_utc(check_in)
    check_out = to_utc(check_out)

    with store.session() as session:
        room = session.get_room(room_id)
        if room is None:
            raise HTTPException(status_code=404, detail="Room not found")

        total = price_for_stay(room.category, check_in, check_out)
        if total is None:
            return {"available": False, "reason_code": "invalid_dates"}

        if session.exists_overlap(room_id, check_in, check_out):
            return {"available": False, "reason_code": "room_booked"}

    return {
        "available": True,
        "room_id": room.id,
        "room_number": room.room_number,
        "room_category": room.category.value,
        "nights": nights_between(check_in, check_out),
        "total_price": str(total),
        "currency": "DKK",
    }
