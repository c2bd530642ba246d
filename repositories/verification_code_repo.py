from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.verification_code import VerificationCode


class VerificationCodeRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_code(self, code: str) -> VerificationCode | None:
        return self.db.execute(
            select(VerificationCode).where(VerificationCode.code == code)
        ).scalar_one_or_none()

    def add(self, code: str) -> VerificationCode:
        entity = VerificationCode(code=code, is_used=False)
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def mark_used(self, entity: VerificationCode, *, email: str) -> None:
        entity.is_used = True
        entity.used_by_email = email.lower()
        entity.used_at = datetime.now(timezone.utc)
        self.db.add(entity)
        self.db.flush()
