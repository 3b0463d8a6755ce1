"""Cancel reservation domain logic.

A guest may cancel their own reservation while check-in is strictly more than
24 hours away. Cancellation is a hard delete; there is no cancelled state.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from johotel.domain.errors import (
    CancellationTooLateError,
    ReservationForbiddenError,
    ReservationNotFoundError,
)
from johotel.domain.store import ReservationStore
from johotel.infra.time import utc_now
from johotel.observability.logging import get_logger

logger = get_logger(__name__)

CANCELLATION_WINDOW = timedelta(hours=24)


def cancel_reservation(
    store: ReservationStore,
    *,
    user_id: int,
    reservation_id: int,
    now: datetime | None = None,
) -> None:
    """Delete a reservation owned by user_id if the window is still open.

    Ownership is checked before timing, so a non-owner always gets
    ReservationForbiddenError. A check-in exactly at now + 24h is too late.

    Args:
        store: Reservation store.
        user_id: Requesting user.
        reservation_id: Reservation to cancel.
        now: Reference instant; defaults to the current UTC time.

    Raises:
        ReservationNotFoundError: If the reservation does not exist.
        ReservationForbiddenError: If user_id does not own it.
        CancellationTooLateError: If check-in is within the window.
    """
    with store.session() as session:
        reservation = session.get(reservation_id, lock=True)
        if reservation is None:
            raise ReservationNotFoundError(f"Reservation {reservation_id} not found")

        if reservation.user_id != user_id:
            raise ReservationForbiddenError(
                f"Reservation {reservation_id} belongs to another user"
            )

        reference = now if now is not None else utc_now()
        if reservation.check_in <= reference + CANCELLATION_WINDOW:
            logger.info(
                "cancellation rejected: window elapsed",
                extra={
                    "extra_fields": {
                        "reservation_id": reservation_id,
                        "check_in": reservation.check_in.isoformat(),
                    },
                },
            )
            raise CancellationTooLateError(
                f"Reservation {reservation_id} can no longer be cancelled"
            )

        session.delete(reservation_id)

    logger.info(
        "reservation cancelled",
        extra={
            "extra_fields": {
                "reservation_id": reservation_id,
                "room_id": reservation.room_id,
            },
        },
    )
