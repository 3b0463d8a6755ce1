"""Initial schema: users, rooms, reservations (SQL-only).

Reservation instants are timestamptz and always written in UTC.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op


# revision identifiers, used by Alembic.
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


_SQL = """
CREATE TABLE users (
    id          BIGSERIAL PRIMARY KEY,
    email       TEXT UNIQUE,
    username    TEXT,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at  TIMESTAMPTZ NOT NULL DEFAULT now()
);

CREATE TABLE rooms (
    id           BIGSERIAL PRIMARY KEY,
    room_number  INTEGER NOT NULL UNIQUE,
    category     TEXT NOT NULL DEFAULT 'Standard'
                 CHECK (category IN ('Standard', 'Family', 'Suite')),
    created_at   TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at   TIMESTAMPTZ NOT NULL DEFAULT now()
);

CREATE TABLE reservations (
    id          BIGSERIAL PRIMARY KEY,
    user_id     BIGINT NOT NULL REFERENCES users (id),
    room_id     BIGINT NOT NULL REFERENCES rooms (id),
    check_in    TIMESTAMPTZ NOT NULL,
    check_out   TIMESTAMPTZ NOT NULL,
    confirmed   BOOLEAN NOT NULL DEFAULT false,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at  TIMESTAMPTZ NOT NULL DEFAULT now(),
    CONSTRAINT reservations_check_in_before_check_out CHECK (check_in < check_out)
);

CREATE INDEX ix_reservations_room_id_check_in_check_out
    ON reservations (room_id, check_in, check_out);

CREATE INDEX ix_reservations_user_id ON reservations (user_id);
"""


def upgrade() -> None:
    conn = op.get_bind()
    conn.exec_driver_sql(_SQL)


def downgrade() -> None:
    raise NotImplementedError("Downgrade not supported")
