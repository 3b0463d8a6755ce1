"""Storage contract consumed by the admission engine.

A store hands out sessions. A session is one unit of work: everything done
through it is committed together on a clean exit and discarded if the block
raises. Opening a session with ``lock_room`` serializes it against every other
session holding the same room, which is what makes the overlap check and the
insert a single atomic admission decision.
"""

from __future__ import annotations

from datetime import datetime
from typing import ContextManager, Protocol

from johotel.domain.models import NewReservation, Reservation, Room


class StoreSession(Protocol):
    def get_room(self, room_id: int) -> Room | None: ...

    def exists_overlap(
        self, room_id: int, check_in: datetime, check_out: datetime
    ) -> bool: ...

    def insert(self, new: NewReservation) -> Reservation: ...

    def get(self, reservation_id: int, *, lock: bool = False) -> Reservation | None: ...

    def delete(self, reservation_id: int) -> None: ...


class ReservationStore(Protocol):
    def session(self, *, lock_room: int | None = None) -> ContextManager[StoreSession]: ...
