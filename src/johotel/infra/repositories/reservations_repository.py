"""Reservations repository - persistence for reservation records.

Uses raw SQL with psycopg2 (no ORM).
"""

from datetime import datetime

from psycopg2.extensions import cursor as PgCursor

from johotel.domain.models import Reservation

_COLUMNS = "id, user_id, room_id, check_in, check_out, confirmed, created_at, updated_at"


def _row_to_reservation(row: tuple) -> Reservation:
    return Reservation(
        id=int(row[0]),
        user_id=int(row[1]),
        room_id=int(row[2]),
        check_in=row[3],
        check_out=row[4],
        confirmed=bool(row[5]),
        created_at=row[6],
        updated_at=row[7],
    )


def insert_reservation(
    cur: PgCursor,
    *,
    user_id: int,
    room_id: int,
    check_in: datetime,
    check_out: datetime,
    confirmed: bool = True,
) -> Reservation:
    """Insert a reservation and return the stored row.

    Args:
        cur: Database cursor (within transaction).
        user_id: Owning user.
        room_id: Reserved room.
        check_in: Check-in instant (UTC).
        check_out: Check-out instant (UTC).
        confirmed: Whether the row counts towards room overlap.

    Returns:
        The inserted reservation, including id and timestamps.
    """
    cur.execute(
        f"""
        INSERT INTO reservations (user_id, room_id, check_in, check_out, confirmed)
        VALUES (%s, %s, %s, %s, %s)
        RETURNING {_COLUMNS}
        """,
        (user_id, room_id, check_in, check_out, confirmed),
    )
    return _row_to_reservation(cur.fetchone())


def get_reservation(
    cur: PgCursor,
    reservation_id: int,
    *,
    lock: bool = False,
) -> Reservation | None:
    """Fetch a reservation by id, optionally locking it FOR UPDATE."""
    suffix = " FOR UPDATE" if lock else ""
    cur.execute(
        f"SELECT {_COLUMNS} FROM reservations WHERE id = %s{suffix}",
        (reservation_id,),
    )
    row = cur.fetchone()
    return _row_to_reservation(row) if row is not None else None


def delete_reservation(cur: PgCursor, reservation_id: int) -> bool:
    """Delete a reservation. Returns True if a row was removed."""
    cur.execute("DELETE FROM reservations WHERE id = %s", (reservation_id,))
    return cur.rowcount > 0
