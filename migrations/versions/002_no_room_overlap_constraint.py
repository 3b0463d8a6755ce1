"""DB-level exclusion constraint against double-booking a room.

Adds an EXCLUDE USING GIST constraint that prevents two confirmed
reservations for the same room_id from having overlapping time ranges.

Admission already serializes per room by locking the room row; this
constraint guarantees the invariant even if application code is bypassed.

tstzrange(check_in, check_out, '[)') is half-open, matching the application
check: check_out_A == check_in_B is NOT a conflict.

Revision ID: 002_no_room_overlap_constraint
Revises: 001_initial_schema
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op

revision = "002_no_room_overlap_constraint"
down_revision = "001_initial_schema"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    op.execute(
        """
        ALTER TABLE reservations
        ADD CONSTRAINT no_room_overlap
        EXCLUDE USING gist (
            room_id WITH =,
            tstzrange(check_in, check_out, '[)') WITH &&
        )
        WHERE (confirmed)
        """
    )


def downgrade() -> None:
    op.execute("ALTER TABLE reservations DROP CONSTRAINT IF EXISTS no_room_overlap")
    # btree_gist is intentionally kept: other indexes may depend on it.
