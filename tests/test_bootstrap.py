"""Tests for startup migrations and table creation.

Run with: pytest tests/test_bootstrap.py -v
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.pool import StaticPool

from nightflow.db import bootstrap
from nightflow.db.session import build_engine


@pytest.fixture
def bare_engine():
    eng = build_engine("sqlite://", poolclass=StaticPool)
    yield eng
    eng.dispose()


class TestSessionStore:
    """Tests for the refresh token table outside migrations."""

    def test_creates_token_table(self, bare_engine):
        """The token table is created on an empty database."""
        bootstrap.ensure_session_store(bare_engine)

        tables = inspect(bare_engine).get_table_names()
        assert tables == ["refresh_tokens"]

    def test_idempotent(self, bare_engine):
        """Calling it twice is harmless."""
        bootstrap.ensure_session_store(bare_engine)
        bootstrap.ensure_session_store(bare_engine)

        assert inspect(bare_engine).has_table("refresh_tokens")

    def test_memory_backend_without_migrations(self, bare_engine, monkeypatch):
        """Memory storage with migrations off still gets a token table for login."""
        monkeypatch.setattr(bootstrap, "engine", bare_engine)
        monkeypatch.setattr(bootstrap.settings, "RUN_MIGRATIONS", False)
        monkeypatch.setattr(bootstrap.settings, "STORAGE_BACKEND", "memory")
        monkeypatch.setattr(bootstrap.settings, "SEED_DEMO_DATA", False)

        bootstrap.run_migrations_and_seed()

        assert inspect(bare_engine).has_table("refresh_tokens")

    def test_sql_backend_without_migrations_leaves_schema(self, bare_engine, monkeypatch):
        """With SQL storage and migrations off the schema is left to the operator."""
        monkeypatch.setattr(bootstrap, "engine", bare_engine)
        monkeypatch.setattr(bootstrap.settings, "RUN_MIGRATIONS", False)
        monkeypatch.setattr(bootstrap.settings, "STORAGE_BACKEND", "sql")
        monkeypatch.setattr(bootstrap.settings, "SEED_DEMO_DATA", False)

        bootstrap.run_migrations_and_seed()

        assert not inspect(bare_engine).has_table("refresh_tokens")
