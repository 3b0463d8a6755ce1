"""Notification hooks fired after a reservation decision has been committed.

Delivery itself (email, real-time push) lives outside this service. The
default LoggingNotifier only records that a notification would be sent.
"""

from __future__ import annotations

from typing import Protocol

from johotel.api.auth import CurrentUser
from johotel.domain.models import AdmittedReservation
from johotel.observability.logging import get_logger

logger = get_logger(__name__)


class BookingNotifier(Protocol):
    def booking_confirmed(self, user: CurrentUser, admitted: AdmittedReservation) -> None: ...

    def booking_cancelled(self, user: CurrentUser, reservation_id: int) -> None: ...


class LoggingNotifier:
    def booking_confirmed(self, user: CurrentUser, admitted: AdmittedReservation) -> None:
        logger.info(
            "booking confirmation queued",
            extra={
                "extra_fields": {
                    "user_id": user.id,
                    "reservation_id": admitted.reservation.id,
                    "room_number": admitted.room_number,
                    "total_price": str(admitted.total_price),
                },
            },
        )

    def booking_cancelled(self, user: CurrentUser, reservation_id: int) -> None:
        logger.info(
            "booking cancellation queued",
            extra={"extra_fields": {"user_id": user.id, "reservation_id": reservation_id}},
        )
