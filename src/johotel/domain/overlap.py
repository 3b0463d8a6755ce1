"""Interval overlap index for room reservations.

Intervals are half-open: [check_in, check_out).

Overlap formula:  (new_check_in < existing_check_out) AND (new_check_out > existing_check_in)
Strict inequality lets one stay's check-out equal the next stay's check-in.

Only confirmed reservations count towards a conflict.
"""

from __future__ import annotations

from datetime import datetime

from psycopg2.extensions import cursor as PgCursor

from johotel.observability.logging import get_logger

logger = get_logger(__name__)


def intervals_overlap(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime,
) -> bool:
    """Return True if [a_start, a_end) and [b_start, b_end) intersect."""
    return a_start < b_end and a_end > b_start


def log_overlap(
    room_id: int,
    check_in: datetime,
    check_out: datetime,
    conflicting_reservation_id: int,
) -> None:
    # Non-PII fields only: no user id, names or emails.
    logger.warning(
        "room overlap detected",
        extra={
            "extra_fields": {
                "room_id": room_id,
                "requested_check_in": check_in.isoformat(),
                "requested_check_out": check_out.isoformat(),
                "conflicting_reservation_id": conflicting_reservation_id,
            },
        },
    )


def find_overlapping_reservation(
    cur: PgCursor,
    *,
    room_id: int,
    check_in: datetime,
    check_out: datetime,
) -> int | None:
    """Return the id of the first confirmed reservation overlapping the interval.

    Args:
        cur: Database cursor (should be within a transaction).
        room_id: Room identifier.
        check_in: Requested check-in instant (inclusive).
        check_out: Requested check-out instant (exclusive).

    Returns:
        Conflicting reservation id, or None if the interval is free.
    """
    cur.execute(
        """
        SELECT id
        FROM reservations
        WHERE room_id = %s
          AND confirmed
          AND check_in < %s
          AND check_out > %s
        ORDER BY check_in
        LIMIT 1
        """,
        (room_id, check_out, check_in),
    )
    row = cur.fetchone()
    if row is None:
        return None

    conflicting_id = int(row[0])
    log_overlap(room_id, check_in, check_out, conflicting_id)
    return conflicting_id


def has_overlap(
    cur: PgCursor,
    *,
    room_id: int,
    check_in: datetime,
    check_out: datetime,
) -> bool:
    """Return True if any confirmed reservation for the room intersects the interval."""
    return (
        find_overlapping_reservation(
            cur, room_id=room_id, check_in=check_in, check_out=check_out
        )
        is not None
    )
