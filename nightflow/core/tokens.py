# nightflow/core/tokens.py
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from nightflow.core.config import settings


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _encode(payload: Dict[str, Any]) -> str:
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(*, sub: str, scope: str = "") -> str:
    """Short-lived access token (minutes)."""
    now = _now()
    payload: Dict[str, Any] = {
        "type": "access",
        "sub": sub,
        "scope": scope,
        "jti": uuid.uuid4().hex,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)).timestamp()),
    }
    return _encode(payload)


def create_refresh_token(*, sub: str, scope: str = "") -> str:
    """Long-lived refresh token (days); its jti is persisted so logout can revoke it."""
    now = _now()
    payload: Dict[str, Any] = {
        "type": "refresh",
        "sub": sub,
        "scope": scope,
        "jti": uuid.uuid4().hex,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)).timestamp()),
    }
    return _encode(payload)


def _decode(token: str, expected_type: str) -> Optional[Dict[str, Any]]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if not isinstance(payload, dict):
        return None
    if payload.get("type") != expected_type:
        return None
    if not payload.get("sub") or not payload.get("jti"):
        return None
    return payload


def decode_access(token: str) -> Optional[Dict[str, Any]]:
    return _decode(token, "access")


def decode_refresh(token: str) -> Optional[Dict[str, Any]]:
    return _decode(token, "refresh")
