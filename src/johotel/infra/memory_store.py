"""In-process reservation store.

Thread-safe stand-in for the PostgreSQL store, used by tests and local runs.
Writes made through a session are staged and only become visible when the
session exits cleanly; a session that raises leaves the store untouched.
Sessions opened with lock_room hold a per-room lock for their whole duration,
and get(..., lock=True) holds a per-reservation lock until the session ends,
like SELECT ... FOR UPDATE does.
"""

from __future__ import annotations

import itertools
import threading
from contextlib import contextmanager, nullcontext
from dataclasses import replace
from datetime import datetime
from typing import ContextManager, Iterable, Iterator

from johotel.domain.models import NewReservation, Reservation, Room
from johotel.domain.overlap import intervals_overlap, log_overlap
from johotel.infra.time import utc_now


class InMemorySession:
    def __init__(self, store: InMemoryReservationStore) -> None:
        self._store = store
        self._inserted: dict[int, Reservation] = {}
        self._deleted: set[int] = set()
        self._held: dict[int, threading.Lock] = {}

    def _visible(self) -> list[Reservation]:
        committed = self._store.snapshot()
        rows = [r for r in committed if r.id not in self._deleted]
        rows.extend(r for r in self._inserted.values() if r.id not in self._deleted)
        return rows

    def get_room(self, room_id: int) -> Room | None:
        return self._store.get_room(room_id)

    def exists_overlap(self, room_id: int, check_in: datetime, check_out: datetime) -> bool:
        for r in sorted(self._visible(), key=lambda r: r.check_in):
            if r.room_id != room_id or not r.confirmed:
                continue
            if intervals_overlap(check_in, check_out, r.check_in, r.check_out):
                log_overlap(room_id, check_in, check_out, r.id)
                return True
        return False

    def insert(self, new: NewReservation) -> Reservation:
        now = utc_now()
        reservation = Reservation(
            id=self._store.next_id(),
            user_id=new.user_id,
            room_id=new.room_id,
            check_in=new.check_in,
            check_out=new.check_out,
            confirmed=new.confirmed,
            created_at=now,
            updated_at=now,
        )
        self._inserted[reservation.id] = reservation
        return reservation

    def get(self, reservation_id: int, *, lock: bool = False) -> Reservation | None:
        if reservation_id in self._deleted:
            return None
        if reservation_id in self._inserted:
            return self._inserted[reservation_id]
        if lock and reservation_id not in self._held:
            row_lock = self._store._row_lock(reservation_id)
            if row_lock is None:
                return None
            row_lock.acquire()
            self._held[reservation_id] = row_lock
        # Re-read after acquiring: a session we waited on may have deleted it.
        return self._store.get_reservation(reservation_id)

    def delete(self, reservation_id: int) -> None:
        self._deleted.add(reservation_id)

    def release(self) -> None:
        for row_lock in self._held.values():
            row_lock.release()
        self._held.clear()


class InMemoryReservationStore:
    def __init__(self, rooms: Iterable[Room] = ()) -> None:
        self._lock = threading.Lock()
        self._room_locks: dict[int, threading.Lock] = {}
        self._row_locks: dict[int, threading.Lock] = {}
        self._rooms: dict[int, Room] = {room.id: room for room in rooms}
        self._reservations: dict[int, Reservation] = {}
        self._ids = itertools.count(1)

    def add_room(self, room: Room) -> None:
        with self._lock:
            self._rooms[room.id] = room

    def get_room(self, room_id: int) -> Room | None:
        with self._lock:
            return self._rooms.get(room_id)

    def get_reservation(self, reservation_id: int) -> Reservation | None:
        with self._lock:
            return self._reservations.get(reservation_id)

    def snapshot(self) -> list[Reservation]:
        with self._lock:
            return list(self._reservations.values())

    def count(self) -> int:
        with self._lock:
            return len(self._reservations)

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def put(self, reservation: Reservation) -> Reservation:
        """Store a reservation bypassing admission, under a fresh id. For fixtures only."""
        with self._lock:
            reservation = replace(reservation, id=next(self._ids))
            self._reservations[reservation.id] = reservation
            return reservation

    def _room_lock(self, room_id: int) -> ContextManager:
        # Unknown rooms get no lock; admission rejects them anyway.
        with self._lock:
            if room_id not in self._rooms:
                return nullcontext()
            return self._room_locks.setdefault(room_id, threading.Lock())

    def _row_lock(self, reservation_id: int) -> threading.Lock | None:
        with self._lock:
            if reservation_id not in self._reservations:
                return None
            return self._row_locks.setdefault(reservation_id, threading.Lock())

    def _commit(self, session: InMemorySession) -> None:
        with self._lock:
            for reservation_id in session._deleted:
                self._reservations.pop(reservation_id, None)
                self._row_locks.pop(reservation_id, None)
            for reservation_id, reservation in session._inserted.items():
                if reservation_id not in session._deleted:
                    self._reservations[reservation_id] = reservation

    @contextmanager
    def session(self, *, lock_room: int | None = None) -> Iterator[InMemorySession]:
        guard = self._room_lock(lock_room) if lock_room is not None else nullcontext()
        with guard:
            session = InMemorySession(self)
            try:
                yield session
                self._commit(session)
            finally:
                session.release()
