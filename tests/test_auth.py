"""Unit tests for credential checks and session tokens.

Run with: pytest tests/test_auth.py -v
"""

from nightflow.core.security import hash_password, verify_password
from nightflow.core.tokens import create_access_token, create_refresh_token, decode_access, decode_refresh
from nightflow.crud.token import refresh_token_crud
from nightflow.services.auth import SingleUserVerifier, end_session, issue_session, rotate_session


class TestPasswords:
    """Tests for password hashing."""

    def test_hash_roundtrip(self):
        """A hash verifies its own password only."""
        hashed = hash_password("s3cret")

        assert hashed != "s3cret"
        assert verify_password("s3cret", hashed)
        assert not verify_password("other", hashed)

    def test_malformed_hash(self):
        """An unrecognised stored hash never verifies."""
        assert verify_password("s3cret", "not-a-hash") is False


class TestTokens:
    """Tests for JWT encoding."""

    def test_access_token(self):
        """Access tokens decode as access only."""
        token = create_access_token(sub="admin")

        assert decode_access(token)["sub"] == "admin"
        assert decode_refresh(token) is None

    def test_refresh_token(self):
        """Refresh tokens decode as refresh only."""
        token = create_refresh_token(sub="admin")

        assert decode_refresh(token)["type"] == "refresh"
        assert decode_access(token) is None

    def test_garbage(self):
        """Tampered tokens are rejected."""
        assert decode_access("abc.def.ghi") is None


class TestSingleUserVerifier:
    """Tests for the single dashboard account."""

    def test_authenticate(self):
        """Only the configured username and password pass."""
        verifier = SingleUserVerifier("owner", hash_password("pw"))

        assert verifier.authenticate(" owner ", "pw").username == "owner"
        assert verifier.authenticate("owner", "wrong") is None
        assert verifier.authenticate("someone", "pw") is None
        assert verifier.authenticate("owner", "") is None

    def test_lookup(self):
        """Token subjects resolve only to the configured user."""
        verifier = SingleUserVerifier("owner", hash_password("pw"))

        assert verifier.lookup("owner").username == "owner"
        assert verifier.lookup("admin") is None


class TestSessions:
    """Tests for refresh token persistence."""

    def test_issue_registers_refresh_token(self, db_session):
        """Issued refresh tokens are stored as active."""
        verifier = SingleUserVerifier("owner", hash_password("pw"))
        session = issue_session(db_session, verifier.authenticate("owner", "pw"))

        jti = decode_refresh(session.refresh_token)["jti"]
        assert refresh_token_crud.is_active(db_session, jti)

    def test_rotate_revokes_old_token(self, db_session):
        """Rotation issues a new pair and revokes the old refresh token."""
        verifier = SingleUserVerifier("owner", hash_password("pw"))
        first = issue_session(db_session, verifier.lookup("owner"))

        second = rotate_session(db_session, verifier, first.refresh_token)

        assert second is not None
        assert second.refresh_token != first.refresh_token
        assert rotate_session(db_session, verifier, first.refresh_token) is None

    def test_end_session(self, db_session):
        """Logout revokes once."""
        verifier = SingleUserVerifier("owner", hash_password("pw"))
        session = issue_session(db_session, verifier.lookup("owner"))

        assert end_session(db_session, session.refresh_token) is True
        assert end_session(db_session, session.refresh_token) is False
        assert end_session(db_session, "garbage") is False
