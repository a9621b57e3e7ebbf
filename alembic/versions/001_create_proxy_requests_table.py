"""Create the proxy_requests table.

Revision ID: 001
Revises:
Create Date: 2026-01-12

Requesters (mandants) and volunteers (mandataires) share one table and are
told apart by the type column.
"""

from alembic import op


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Apply migration: create proxy_requests table."""
    op.execute("""
        CREATE EXTENSION IF NOT EXISTS pgcrypto;

        -- 1. proxy_requests
        CREATE TABLE proxy_requests (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            type TEXT NOT NULL CHECK (type IN ('requester', 'volunteer')),
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            national_elector_number TEXT NOT NULL,
            phone TEXT NOT NULL,
            email TEXT NOT NULL,
            voting_bureau SMALLINT CHECK (voting_bureau IN (1, 2, 3)),
            support_committee_consent BOOLEAN NOT NULL DEFAULT TRUE,
            newsletter_consent BOOLEAN NOT NULL DEFAULT TRUE,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'matched')),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );

        -- 2. One registration per elector number and role
        CREATE UNIQUE INDEX idx_proxy_requests_type_nne
        ON proxy_requests(type, national_elector_number);

        -- 3. Indexes
        CREATE INDEX idx_proxy_requests_type_created_at
        ON proxy_requests(type, created_at DESC);

        -- 4. Comments
        COMMENT ON TABLE proxy_requests IS 'Procuration registrations: requesters (mandants) and volunteers (mandataires)';
        COMMENT ON COLUMN proxy_requests.type IS 'requester or volunteer, fixed at registration';
        COMMENT ON COLUMN proxy_requests.national_elector_number IS 'Numéro national d''électeur (1 to 15 digits)';
        COMMENT ON COLUMN proxy_requests.voting_bureau IS 'Bureau de vote (1, 2 or 3), optional';
        COMMENT ON COLUMN proxy_requests.status IS 'pending until a match is confirmed, then matched';
    """)


def downgrade() -> None:
    """Rollback migration: drop proxy_requests table."""
    op.execute("""
        DROP TABLE IF EXISTS proxy_requests CASCADE;
    """)
