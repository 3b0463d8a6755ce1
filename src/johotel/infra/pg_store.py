"""PostgreSQL reservation store.

Each session is one psycopg2 transaction (see johotel.infra.db.txn). A session
opened with lock_room takes a row lock on the room first, which serializes
admissions for that room until commit or rollback. The no_room_overlap
exclusion constraint on reservations backs this up at the schema level.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator

import psycopg2
from psycopg2.extensions import connection as PgConnection, cursor as PgCursor

from johotel.domain.errors import StorageError
from johotel.domain.models import NewReservation, Reservation, Room
from johotel.domain.overlap import has_overlap
from johotel.infra.db import get_conn, txn
from johotel.infra.repositories import reservations_repository, rooms_repository


class PostgresSession:
    """StoreSession bound to an open transaction cursor."""

    def __init__(self, cur: PgCursor, locked_room: Room | None = None) -> None:
        self._cur = cur
        self._locked_room = locked_room

    def get_room(self, room_id: int) -> Room | None:
        if self._locked_room is not None and self._locked_room.id == room_id:
            return self._locked_room
        return rooms_repository.get_room(self._cur, room_id)

    def exists_overlap(self, room_id: int, check_in: datetime, check_out: datetime) -> bool:
        return has_overlap(self._cur, room_id=room_id, check_in=check_in, check_out=check_out)

    def insert(self, new: NewReservation) -> Reservation:
        return reservations_repository.insert_reservation(
            self._cur,
            user_id=new.user_id,
            room_id=new.room_id,
            check_in=new.check_in,
            check_out=new.check_out,
            confirmed=new.confirmed,
        )

    def get(self, reservation_id: int, *, lock: bool = False) -> Reservation | None:
        return reservations_repository.get_reservation(self._cur, reservation_id, lock=lock)

    def delete(self, reservation_id: int) -> None:
        reservations_repository.delete_reservation(self._cur, reservation_id)


class PostgresReservationStore:
    """ReservationStore backed by PostgreSQL.

    Args:
        connect: Connection factory; defaults to get_conn (DATABASE_URL).
            Every session opens its own connection and closes it on exit.
    """

    def __init__(self, connect: Callable[[], PgConnection] = get_conn) -> None:
        self._connect = connect

    @contextmanager
    def session(self, *, lock_room: int | None = None) -> Iterator[PostgresSession]:
        conn = self._connect()
        try:
            with txn(conn) as cur:
                locked = rooms_repository.lock_room(cur, lock_room) if lock_room is not None else None
                yield PostgresSession(cur, locked_room=locked)
        except psycopg2.IntegrityError as exc:
            # Includes exclusion_violation from no_room_overlap.
            raise StorageError(f"reservation write rejected by database: {exc.pgcode}") from exc
        finally:
            conn.close()
