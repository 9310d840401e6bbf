from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from nightflow.models.tokens import RefreshToken

def _utc(ts: int) -> datetime:
    return datetime.fromtimestamp(ts, tz=timezone.utc)

class CRUDRefreshToken:
    def get_by_jti(self, db: Session, jti: str) -> Optional[RefreshToken]:
        return db.execute(select(RefreshToken).where(RefreshToken.jti == jti)).scalar_one_or_none()

    def register(self, db: Session, payload: dict) -> RefreshToken:
        row = RefreshToken(
            jti=payload["jti"],
            username=payload["sub"],
            issued_at=_utc(payload["iat"]),
            expires_at=_utc(payload["exp"]),
        )
        db.add(row); db.commit(); db.refresh(row)
        return row

    def is_active(self, db: Session, jti: str) -> bool:
        row = self.get_by_jti(db, jti)
        return row is not None and row.revoked_at is None

    def revoke(self, db: Session, jti: str) -> bool:
        row = self.get_by_jti(db, jti)
        if not row or row.revoked_at is not None:
            return False
        row.revoked_at = datetime.now(timezone.utc)
        db.add(row); db.commit()
        return True

refresh_token_crud = CRUDRefreshToken()
