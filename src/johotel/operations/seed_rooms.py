"""Seed the rooms table.

Rooms 1..N are numbered by id. The first 75% are Standard, the next 15%
Family and the remainder Suites (400 rooms -> 300 / 60 / 40). Re-running is
safe: rows clashing with an existing id or room number are left as they are.

Usage: DATABASE_URL=... SEED_ROOM_COUNT=400 python -m johotel.operations.seed_rooms
"""

import os
import sys

from johotel.domain.models import Room, RoomCategory
from johotel.infra.db import get_conn


def env(name: str, default: str | None = None) -> str:
    v = os.getenv(name, default)
    if v is None or v.strip() == "":
        raise RuntimeError(f"Missing env var: {name}")
    return v


def room_plan(count: int) -> list[Room]:
    standard_upto = count * 75 // 100
    family_upto = count * 90 // 100
    rooms = []
    for number in range(1, count + 1):
        if number <= standard_upto:
            category = RoomCategory.STANDARD
        elif number <= family_upto:
            category = RoomCategory.FAMILY
        else:
            category = RoomCategory.SUITE
        rooms.append(Room(id=number, room_number=number, category=category))
    return rooms


def main() -> int:
    count = int(env("SEED_ROOM_COUNT", "400"))
    if count < 1:
        raise RuntimeError("SEED_ROOM_COUNT must be positive")

    conn = get_conn()
    try:
        with conn.cursor() as cur:
            cur.executemany(
                """
                INSERT INTO rooms (id, room_number, category)
                VALUES (%s, %s, %s)
                ON CONFLICT DO NOTHING
                """,
                [(r.id, r.room_number, r.category.value) for r in room_plan(count)],
            )
            # Keep the id sequence ahead of the explicit ids inserted above.
            cur.execute(
                "SELECT setval(pg_get_serial_sequence('rooms', 'id'), "
                "(SELECT COALESCE(MAX(id), 1) FROM rooms))"
            )
        conn.commit()
    finally:
        conn.close()

    print(f"OK: seeded {count} rooms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
