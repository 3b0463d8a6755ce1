"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI, Request, Response

from johotel.domain.store import ReservationStore
from johotel.infra.pg_store import PostgresReservationStore
from johotel.notifications import BookingNotifier, LoggingNotifier
from johotel.observability.correlation import CORRELATION_ID_HEADER, correlation_scope

from .routers import public
from .routes import bookings, rooms


def create_app(
    store: ReservationStore | None = None,
    notifier: BookingNotifier | None = None,
) -> FastAPI:
    """Create the booking API.

    Args:
        store: Reservation store. Defaults to PostgreSQL via DATABASE_URL;
            no connection is opened until the first request.
        notifier: Post-decision notifier. Defaults to LoggingNotifier.
    """
    app = FastAPI(
        title="JoHotel Bookings",
        docs_url=None,
        redoc_url=None,
    )
    app.state.store = store if store is not None else PostgresReservationStore()
    app.state.notifier = notifier if notifier is not None else LoggingNotifier()

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_ID_HEADER)) as cid:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response

    app.include_router(public.router)
    app.include_router(bookings.router)
    app.include_router(rooms.router)

    return app
