"""Shared pytest fixtures for JoHotel tests."""
import io
import json
import sys
sys.dont_write_bytecode = True

import pytest  # noqa: E402

from johotel.domain.models import Room, RoomCategory  # noqa: E402
from johotel.infra.memory_store import InMemoryReservationStore  # noqa: E402
from johotel.observability.logging import get_logger  # noqa: E402

from .helpers import TEST_JWT_SECRET  # noqa: E402


@pytest.fixture
def rooms():
    return [
        Room(id=1, room_number=101, category=RoomCategory.STANDARD),
        Room(id=2, room_number=301, category=RoomCategory.FAMILY),
        Room(id=3, room_number=361, category=RoomCategory.SUITE),
    ]


@pytest.fixture
def store(rooms):
    """Empty in-memory reservation store with three rooms."""
    return InMemoryReservationStore(rooms)


@pytest.fixture
def jwt_env(monkeypatch):
    """Configure JWT verification for the duration of a test."""
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.delenv("JWT_ISSUER", raising=False)
    monkeypatch.delenv("JWT_AUDIENCE", raising=False)
    yield


@pytest.fixture
def json_log(monkeypatch):
    """Redirect a JSON logger's stdout handler into a buffer.

    Returns a function taking the logger name; calling its result gives the
    parsed JSON lines written so far.
    """

    def capture(name):
        buf = io.StringIO()
        handler = get_logger(name).handlers[0]
        monkeypatch.setattr(handler, "stream", buf)
        return lambda: [json.loads(line) for line in buf.getvalue().splitlines()]

    return capture
