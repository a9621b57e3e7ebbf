"""Tests for migration 003: disabled flag and active-match uniqueness."""

import importlib.util

from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(scope="module")
def migration_003():
    """Load the migration module with importlib."""
    migration_path = (
        Path(__file__).parent.parent.parent
        / "alembic"
        / "versions"
        / "003_add_disabled_and_active_match_uniqueness.py"
    )
    spec = importlib.util.spec_from_file_location("migration_003", migration_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestMigration003:
    def test_revision_chain(self, migration_003) -> None:
        assert migration_003.revision == "003"
        assert migration_003.down_revision == "002"

    def test_upgrade_adds_columns(self, migration_003) -> None:
        with patch.object(migration_003, "op") as mock_op:
            migration_003.upgrade()

            mock_op.execute.assert_called_once()
            sql = mock_op.execute.call_args[0][0]

            assert "ADD COLUMN IF NOT EXISTS disabled BOOLEAN DEFAULT FALSE" in sql
            assert "ADD COLUMN IF NOT EXISTS notified_at TIMESTAMPTZ" in sql

    def test_upgrade_limits_uniqueness_to_active_matches(self, migration_003) -> None:
        with patch.object(migration_003, "op") as mock_op:
            migration_003.upgrade()
            sql = mock_op.execute.call_args[0][0]

            assert sql.count("CREATE UNIQUE INDEX") == 2
            assert "ON proxy_matches(requester_id)" in sql
            assert "ON proxy_matches(volunteer_id)" in sql
            assert sql.count("WHERE status IN ('pending', 'confirmed')") == 2

    def test_downgrade_reverts_everything(self, migration_003) -> None:
        with patch.object(migration_003, "op") as mock_op:
            migration_003.downgrade()
            sql = mock_op.execute.call_args[0][0]

            assert "DROP INDEX IF EXISTS idx_proxy_matches_active_requester" in sql
            assert "DROP INDEX IF EXISTS idx_proxy_matches_active_volunteer" in sql
            assert "DROP COLUMN IF EXISTS notified_at" in sql
            assert "DROP COLUMN IF EXISTS disabled" in sql
