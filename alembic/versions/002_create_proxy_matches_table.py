"""Create the proxy_matches table.

Revision ID: 002
Revises: 001
Create Date: 2026-01-19

A match (binôme) pairs one requester with one volunteer. Deleting a
participant deletes their matches.
"""

from alembic import op


revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Apply migration: create proxy_matches table."""
    op.execute("""
        -- 1. proxy_matches
        CREATE TABLE proxy_matches (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            requester_id UUID NOT NULL
                REFERENCES proxy_requests(id) ON DELETE CASCADE,
            volunteer_id UUID NOT NULL
                REFERENCES proxy_requests(id) ON DELETE CASCADE,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'confirmed')),
            confirmed_at TIMESTAMPTZ,
            confirmed_by TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CHECK (requester_id <> volunteer_id)
        );

        -- 2. Indexes
        CREATE INDEX idx_proxy_matches_requester_id ON proxy_matches(requester_id);
        CREATE INDEX idx_proxy_matches_volunteer_id ON proxy_matches(volunteer_id);

        -- 3. Comments
        COMMENT ON TABLE proxy_matches IS 'Procuration matches (binômes) between a requester and a volunteer';
        COMMENT ON COLUMN proxy_matches.status IS 'pending when proposed, confirmed once both parties were emailed';
        COMMENT ON COLUMN proxy_matches.confirmed_by IS 'Opaque id of the operator who confirmed';
    """)


def downgrade() -> None:
    """Rollback migration: drop proxy_matches table."""
    op.execute("""
        DROP TABLE IF EXISTS proxy_matches CASCADE;
    """)
