from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from nightflow.core.config import settings
from nightflow.core.tokens import decode_access
from nightflow.db.init_db import seed_demo_data
from nightflow.db.session import get_db
from nightflow.repository.base import EventRepository
from nightflow.repository.memory import InMemoryEventRepository
from nightflow.repository.sql import SqlEventRepository
from nightflow.schemas.token import AuthUser
from nightflow.services.auth import CredentialVerifier, get_verifier

_memory_repository: Optional[InMemoryEventRepository] = None


def memory_repository() -> InMemoryEventRepository:
    global _memory_repository
    if _memory_repository is None:
        _memory_repository = InMemoryEventRepository()
        if settings.SEED_DEMO_DATA:
            seed_demo_data(_memory_repository)
    return _memory_repository


# ----------------------------------------------------------------------
# Storage: SQL per request session, or the process-wide in-memory store
# ----------------------------------------------------------------------
def get_repository(db: Session = Depends(get_db)) -> EventRepository:
    if settings.STORAGE_BACKEND == "memory":
        return memory_repository()
    return SqlEventRepository(db)


# ----------------------------------------------------------------------
# Reads the Bearer token from the Authorization header
# ----------------------------------------------------------------------
def get_bearer_token(authorization: str = Header(None, alias="Authorization")) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid Authorization header")
    return parts[1]


def get_current_user(
    token: str = Depends(get_bearer_token),
    verifier: CredentialVerifier = Depends(get_verifier),
) -> AuthUser:
    payload = decode_access(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid token")
    user = verifier.lookup(payload["sub"])
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user
