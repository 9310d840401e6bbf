# nightflow/services/auth.py
"""Credential verification and session token issuing.

The dashboard has a single account; ``SingleUserVerifier`` checks it. Any
other identity source plugs in by implementing ``CredentialVerifier`` and
overriding the ``get_verifier`` dependency.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional

from sqlalchemy.orm import Session

from nightflow.core.config import settings
from nightflow.core.security import hash_password, verify_password
from nightflow.core.tokens import create_access_token, create_refresh_token, decode_refresh
from nightflow.crud.token import refresh_token_crud
from nightflow.schemas.token import AuthResponse, AuthUser

logger = logging.getLogger(__name__)


class CredentialVerifier(ABC):
    @abstractmethod
    def authenticate(self, username: str, password: str) -> Optional[AuthUser]:
        """Return the user for valid credentials, None otherwise."""
        ...

    def lookup(self, username: str) -> Optional[AuthUser]:
        """Resolve a username carried by a token back to a user."""
        return None


class SingleUserVerifier(CredentialVerifier):
    def __init__(self, username: str, password_hash: str) -> None:
        self.username = username
        self.password_hash = password_hash

    @classmethod
    def from_settings(cls) -> SingleUserVerifier:
        pw_hash = settings.ADMIN_PASSWORD_HASH or hash_password(settings.ADMIN_PASSWORD)
        return cls(settings.ADMIN_USERNAME, pw_hash)

    def authenticate(self, username: str, password: str) -> Optional[AuthUser]:
        username = (username or "").strip()
        if username != self.username or not password:
            return None
        if not verify_password(password, self.password_hash):
            return None
        return AuthUser(username=username)

    def lookup(self, username: str) -> Optional[AuthUser]:
        return AuthUser(username=username) if username == self.username else None


@lru_cache
def get_verifier() -> CredentialVerifier:
    return SingleUserVerifier.from_settings()


def issue_session(db: Session, user: AuthUser) -> AuthResponse:
    access = create_access_token(sub=user.username)
    refresh = create_refresh_token(sub=user.username)
    refresh_token_crud.register(db, decode_refresh(refresh))
    logger.info("session issued for %s", user.username)
    return AuthResponse(access_token=access, refresh_token=refresh, user=user)


def rotate_session(db: Session, verifier: CredentialVerifier, token: str) -> Optional[AuthResponse]:
    payload = decode_refresh(token)
    if not payload or not refresh_token_crud.is_active(db, payload["jti"]):
        return None
    user = verifier.lookup(payload["sub"])
    if user is None:
        return None
    refresh_token_crud.revoke(db, payload["jti"])
    return issue_session(db, user)


def end_session(db: Session, token: str) -> bool:
    payload = decode_refresh(token)
    if not payload:
        return False
    revoked = refresh_token_crud.revoke(db, payload["jti"])
    if revoked:
        logger.info("session closed for %s", payload["sub"])
    return revoked
