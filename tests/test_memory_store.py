"""Tests for the in-memory reservation store's session semantics."""

import threading

import pytest

from johotel.domain.models import NewReservation, Room, RoomCategory
from johotel.infra.memory_store import InMemoryReservationStore

from .helpers import utc


def _new(room_id=1, day=1):
    return NewReservation(
        user_id=7,
        room_id=room_id,
        check_in=utc(2030, 4, day, 14),
        check_out=utc(2030, 4, day + 2, 11),
    )


class TestSessions:
    def test_insert_visible_after_commit(self, store):
        with store.session() as session:
            r = session.insert(_new())
            assert store.count() == 0
            assert session.get(r.id) == r

        assert store.get_reservation(r.id) == r

    def test_exception_discards_staged_writes(self, store):
        with pytest.raises(RuntimeError):
            with store.session() as session:
                session.insert(_new())
                raise RuntimeError("boom")

        assert store.count() == 0

    def test_exception_discards_staged_delete(self, store):
        with store.session() as session:
            r = session.insert(_new())

        with pytest.raises(RuntimeError):
            with store.session() as session:
                session.delete(r.id)
                assert session.get(r.id) is None
                raise RuntimeError("boom")

        assert store.get_reservation(r.id) is not None

    def test_staged_insert_counts_for_overlap(self, store):
        with store.session(lock_room=1) as session:
            session.insert(_new(day=1))
            assert session.exists_overlap(1, utc(2030, 4, 2), utc(2030, 4, 4)) is True
            assert session.exists_overlap(2, utc(2030, 4, 2), utc(2030, 4, 4)) is False

    def test_ids_are_unique(self, store):
        with store.session() as session:
            ids = {session.insert(_new(day=d)).id for d in (1, 5, 9)}

        assert len(ids) == 3

    def test_get_room(self, store):
        with store.session() as session:
            assert session.get_room(1).room_number == 101
            assert session.get_room(999) is None

    def test_add_room(self):
        store = InMemoryReservationStore()
        store.add_room(Room(id=9, room_number=900, category=RoomCategory.SUITE))

        assert store.get_room(9).category is RoomCategory.SUITE


class TestRoomLock:
    def test_room_lock_blocks_second_session(self, store):
        entered = threading.Event()
        release = threading.Event()
        second_entered = threading.Event()

        def holder():
            with store.session(lock_room=1):
                entered.set()
                release.wait(timeout=5)

        def contender():
            with store.session(lock_room=1):
                second_entered.set()

        t1 = threading.Thread(target=holder)
        t1.start()
        entered.wait(timeout=5)

        t2 = threading.Thread(target=contender)
        t2.start()
        assert second_entered.wait(timeout=0.2) is False

        release.set()
        t1.join()
        t2.join()
        assert second_entered.is_set()

    def test_other_room_not_blocked(self, store):
        release = threading.Event()
        entered = threading.Event()

        def holder():
            with store.session(lock_room=1):
                entered.set()
                release.wait(timeout=5)

        t1 = threading.Thread(target=holder)
        t1.start()
        entered.wait(timeout=5)
        try:
            with store.session(lock_room=2) as session:
                assert session.get_room(2) is not None
        finally:
            release.set()
            t1.join()


class TestRowLock:
    def test_locked_get_blocks_second_session(self, store):
        with store.session() as session:
            r = session.insert(_new())
        entered = threading.Event()
        release = threading.Event()
        second_read = []

        def holder():
            with store.session() as session:
                session.get(r.id, lock=True)
                entered.set()
                release.wait(timeout=5)
                session.delete(r.id)

        def contender():
            with store.session() as session:
                second_read.append(session.get(r.id, lock=True))

        t1 = threading.Thread(target=holder)
        t1.start()
        entered.wait(timeout=5)

        t2 = threading.Thread(target=contender)
        t2.start()
        t2.join(timeout=0.2)
        assert second_read == []

        release.set()
        t1.join()
        t2.join()
        assert second_read == [None]

    def test_unlocked_get_does_not_block(self, store):
        with store.session() as session:
            r = session.insert(_new())

        with store.session() as first:
            first.get(r.id, lock=True)
            with store.session() as second:
                assert second.get(r.id) == r

    def test_locked_get_of_missing_row_creates_no_lock(self, store):
        with store.session() as session:
            assert session.get(4242, lock=True) is None

        assert 4242 not in store._row_locks

    def test_row_lock_dropped_after_delete(self, store):
        with store.session() as session:
            r = session.insert(_new())

        with store.session() as session:
            session.get(r.id, lock=True)
            session.delete(r.id)

        assert r.id not in store._row_locks


class TestRoomLockBookkeeping:
    def test_unknown_room_creates_no_lock(self, store):
        for room_id in range(1000, 1050):
            with store.session(lock_room=room_id):
                pass

        assert store._room_locks == {}

    def test_known_room_lock_is_reused(self, store):
        with store.session(lock_room=1):
            pass
        with store.session(lock_room=1):
            pass

        assert list(store._room_locks) == [1]
