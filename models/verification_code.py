from sqlalchemy import Boolean, Column, DateTime, Integer, String, false, func
from core.database import Base


class VerificationCode(Base):
    __tablename__ = "verification_codes"

    id = Column(Integer, primary_key=True)
    code = Column(String(6), nullable=False, unique=True, index=True)
    is_used = Column(Boolean, nullable=False, default=False, server_default=false(), index=True)
    used_by_email = Column(String(255), nullable=True)
    used_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
