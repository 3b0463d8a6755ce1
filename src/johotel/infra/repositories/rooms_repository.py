"""Rooms repository - read-only access to room records.

Uses raw SQL with psycopg2 (no ORM).
"""

from psycopg2.extensions import cursor as PgCursor

from johotel.domain.models import Room, RoomCategory
from johotel.infra.db import fetchone, for_update

_SELECT_ROOM = "SELECT id, room_number, category FROM rooms WHERE id = %s"


def _row_to_room(row: tuple) -> Room:
    return Room(id=int(row[0]), room_number=int(row[1]), category=RoomCategory.parse(row[2]))


def get_room(cur: PgCursor, room_id: int) -> Room | None:
    row = fetchone(cur, _SELECT_ROOM, (room_id,))
    return _row_to_room(row) if row is not None else None


def lock_room(cur: PgCursor, room_id: int) -> Room | None:
    """Lock the room row until the surrounding transaction ends.

    The row lock is the admission token for the room: concurrent admissions
    for the same room queue here. Returns None when the room does not exist
    (nothing is locked in that case).
    """
    row = for_update(cur, _SELECT_ROOM, (room_id,))
    return _row_to_room(row) if row is not None else None
