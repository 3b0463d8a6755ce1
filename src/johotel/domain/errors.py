"""Expected outcomes of admission and cancellation.

Each error carries a stable ``code`` that the request layer maps to a
response. None of them indicates a defect; storage failures are reported
separately through StorageError or the driver's own exceptions.
"""


class ReservationError(Exception):
    """Base class for expected reservation outcomes."""

    code = "reservation_error"


class ReservationNotFoundError(ReservationError):
    """Raised when the referenced room or reservation does not exist."""

    code = "not_found"


class ReservationOverlapError(ReservationError):
    """Raised when the interval conflicts with a confirmed reservation."""

    code = "overlap"

    def __init__(self, room_id: int, message: str | None = None) -> None:
        self.room_id = room_id
        super().__init__(message or f"Room {room_id} is already booked in this period")


class ReservationForbiddenError(ReservationError):
    """Raised when the caller does not own the reservation."""

    code = "forbidden"


class CancellationTooLateError(ReservationError):
    """Raised when the cancellation window has elapsed."""

    code = "too_late"


class InvalidStayError(ReservationError):
    """Raised when the stay spans zero or fewer calendar nights."""

    code = "invalid_stay"


class StorageError(RuntimeError):
    """Unexpected persistence failure, e.g. an integrity constraint violation."""
