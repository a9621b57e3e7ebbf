"""Add proxy_requests.disabled, proxy_matches.notified_at and active-match uniqueness.

Revision ID: 003
Revises: 002
Create Date: 2026-02-02

A participant may be held by at most one pending or confirmed match. The
partial unique indexes enforce it when two operators propose concurrently.
"""

from alembic import op


revision = "003"
down_revision = "002"
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Apply migration: disabled flag, notified_at, partial unique indexes."""
    op.execute("""
        -- 1. Disabled participants are excluded from matching
        ALTER TABLE proxy_requests
        ADD COLUMN IF NOT EXISTS disabled BOOLEAN DEFAULT FALSE;

        -- 2. When the contact emails of a match were dispatched
        ALTER TABLE proxy_matches
        ADD COLUMN IF NOT EXISTS notified_at TIMESTAMPTZ;

        -- 3. At most one active match per participant
        CREATE UNIQUE INDEX idx_proxy_matches_active_requester
        ON proxy_matches(requester_id)
        WHERE status IN ('pending', 'confirmed');

        CREATE UNIQUE INDEX idx_proxy_matches_active_volunteer
        ON proxy_matches(volunteer_id)
        WHERE status IN ('pending', 'confirmed');

        -- 4. Comments
        COMMENT ON COLUMN proxy_requests.disabled IS 'Excluded from matching lists; NULL reads as false';
        COMMENT ON COLUMN proxy_matches.notified_at IS 'Set when the contact emails were sent';
    """)


def downgrade() -> None:
    """Rollback migration: drop the indexes and columns."""
    op.execute("""
        DROP INDEX IF EXISTS idx_proxy_matches_active_volunteer;
        DROP INDEX IF EXISTS idx_proxy_matches_active_requester;

        ALTER TABLE proxy_matches DROP COLUMN IF EXISTS notified_at;
        ALTER TABLE proxy_requests DROP COLUMN IF EXISTS disabled;
    """)
