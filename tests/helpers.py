"""Shared test helper functions for JoHotel tests.

These are NOT fixtures - they are regular functions importable from any test
module and from conftest.py.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone

import jwt

from johotel.domain.models import Reservation

TEST_JWT_SECRET = "test-secret-do-not-use-in-production"


def utc(*args: int) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


def create_token(
    sub: str | int = 7,
    *,
    secret: str = TEST_JWT_SECRET,
    exp: int | None = None,
    claim: str = "sub",
    **extra,
) -> str:
    """Create an HS256 JWT for tests."""
    now = int(time.time())
    payload = {
        claim: str(sub),
        "exp": exp if exp is not None else now + 3600,
        "iat": now,
        **extra,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def make_reservation(
    *,
    user_id: int = 7,
    room_id: int = 1,
    check_in: datetime,
    check_out: datetime,
    confirmed: bool = True,
) -> Reservation:
    """Build a Reservation record for seeding stores directly."""
    now = datetime.now(timezone.utc)
    return Reservation(
        id=0,
        user_id=user_id,
        room_id=room_id,
        check_in=check_in,
        check_out=check_out,
        confirmed=confirmed,
        created_at=now,
        updated_at=now,
    )
