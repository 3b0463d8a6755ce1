"""Booking endpoints for guests.

POST   /bookings       admit a new reservation for the current user
DELETE /bookings/{id}  cancel one of the current user's reservations
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from pydantic import AwareDatetime, BaseModel

from johotel.api.auth import CurrentUser, get_current_user
from johotel.api.dependencies import get_notifier, get_store
from johotel.domain.admission import create_reservation
from johotel.domain.cancellation import cancel_reservation
from johotel.domain.errors import (
    CancellationTooLateError,
    InvalidStayError,
    ReservationForbiddenError,
    ReservationNotFoundError,
    ReservationOverlapError,
)
from johotel.domain.store import ReservationStore
from johotel.infra.time import to_utc, utc_now
from johotel.notifications import BookingNotifier
from johotel.observability.logging import get_logger


class CreateBookingRequest(BaseModel):
    """Request body for a new booking. Instants must carry an offset."""

    room_id: int
    check_in: AwareDatetime
    check_out: AwareDatetime


router = APIRouter(prefix="/bookings", tags=["bookings"])

logger = get_logger(__name__)


@router.post("", status_code=201)
def create_booking(
    body: CreateBookingRequest,
    user: CurrentUser = Depends(get_current_user),
    store: ReservationStore = Depends(get_store),
    notifier: BookingNotifier = Depends(get_notifier),
) -> dict:
    """Admit a reservation for the authenticated user.

    Instants are normalized to UTC here; the engine never sees local time.
    A failing confirmation notification is logged and does not fail the
    booking, which is already committed at that point.
    """
    check_in = to_utc(body.check_in)
    check_out = to_utc(body.check_out)

    if check_in >= check_out:
        raise HTTPException(status_code=400, detail="check_in must be before check_out")
    if check_out <= utc_now():
        raise HTTPException(status_code=400, detail="check_out must be in the future")

    try:
        admitted = create_reservation(
            store,
            user_id=user.id,
            room_id=body.room_id,
            check_in=check_in,
            check_out=check_out,
        )
    except ReservationNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found")
    except ReservationOverlapError:
        raise HTTPException(status_code=409, detail="Room is already booked in this period")
    except InvalidStayError:
        raise HTTPException(status_code=400, detail="Stay must span at least one night")

    try:
        notifier.booking_confirmed(user, admitted)
    except Exception:
        logger.exception(
            "booking confirmation notification failed",
            extra={"extra_fields": {"reservation_id": admitted.reservation.id}},
        )

    return admitted.to_dict()


@router.delete("/{reservation_id}", status_code=204)
def cancel_booking(
    reservation_id: int = Path(..., ge=1),
    user: CurrentUser = Depends(get_current_user),
    store: ReservationStore = Depends(get_store),
    notifier: BookingNotifier = Depends(get_notifier),
) -> Response:
    """Cancel a reservation; only its owner may, and only >24h before check-in."""
    try:
        cancel_reservation(store, user_id=user.id, reservation_id=reservation_id)
    except ReservationNotFoundError:
        raise HTTPException(status_code=404, detail="Booking not found")
    except ReservationForbiddenError:
        raise HTTPException(status_code=403, detail="Not allowed to cancel this booking")
    except CancellationTooLateError:
        raise HTTPException(status_code=400, detail="Too late to cancel this booking")

    try:
        notifier.booking_cancelled(user, reservation_id)
    except Exception:
        logger.exception(
            "booking cancellation notification failed",
            extra={"extra_fields": {"reservation_id": reservation_id}},
        )

    return Response(status_code=204)
