# nightflow/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from nightflow.api.deps import get_current_user, get_db
from nightflow.core.errors import InvalidCredentialsError, InvalidTokenError
from nightflow.schemas.token import AuthResponse, AuthUser, LoginRequest
from nightflow.services.auth import CredentialVerifier, end_session, get_verifier, issue_session, rotate_session

router = APIRouter()


def _get_token_from_body_or_query(token_body: str | None, token_query: str | None) -> str:
    tok = token_body or token_query
    if not tok:
        raise HTTPException(status_code=422, detail=[{"loc": ["token"], "msg": "Field required", "type": "value_error.missing"}])
    return tok


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    verifier: CredentialVerifier = Depends(get_verifier),
):
    user = verifier.authenticate(body.username, body.password)
    if not user:
        raise InvalidCredentialsError()
    return issue_session(db, user)


@router.post("/token", response_model=AuthResponse)
def login_oauth2_form(
    form: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    verifier: CredentialVerifier = Depends(get_verifier),
):
    user = verifier.authenticate(form.username, form.password)
    if not user:
        raise InvalidCredentialsError()
    return issue_session(db, user)


@router.post("/refresh", response_model=AuthResponse)
def refresh(
    token: str | None = Body(default=None, embed=True),        # {"token":"<refresh>"}
    token_q: str | None = Query(default=None, alias="token"),  # ?token=<refresh>
    db: Session = Depends(get_db),
    verifier: CredentialVerifier = Depends(get_verifier),
):
    tok = _get_token_from_body_or_query(token, token_q)
    session = rotate_session(db, verifier, tok)
    if session is None:
        raise InvalidTokenError()
    return session


@router.post("/logout")
def logout(
    token: str | None = Body(default=None, embed=True),
    token_q: str | None = Query(default=None, alias="token"),
    db: Session = Depends(get_db),
):
    tok = _get_token_from_body_or_query(token, token_q)
    end_session(db, tok)
    return {"ok": True}


@router.get("/me", response_model=AuthUser)
def me(user: AuthUser = Depends(get_current_user)):
    return user
