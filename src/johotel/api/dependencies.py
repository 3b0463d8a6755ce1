"""FastAPI dependencies resolving the collaborators attached by create_app."""

from fastapi import Request

from johotel.domain.store import ReservationStore
from johotel.notifications import BookingNotifier


def get_store(request: Request) -> ReservationStore:
    return request.app.state.store


def get_notifier(request: Request) -> BookingNotifier:
    return request.app.state.notifier
