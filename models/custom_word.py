from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Index
from core.database import Base
from models.word_key import WordKey


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CustomWord(Base):
    __tablename__ = "custom_words"
    __table_args__ = (
        UniqueConstraint("user_id", "category", "subcategory", "local_id", name="uq_custom_words_business_key"),
        Index("ix_custom_words_user_subcategory", "user_id", "subcategory"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    local_id = Column(Integer, nullable=False)
    category = Column(String(50), nullable=False)
    subcategory = Column(String(50), nullable=False)
    word = Column(String(100), nullable=False)
    meaning = Column(Text, nullable=False)
    example = Column(Text, nullable=True)
    example_cn = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    @property
    def business_key(self) -> WordKey:
        return WordKey(self.category, self.subcategory, self.local_id)

    def as_dict(self) -> dict:
        # owner and timestamps stay out of the public record
        return {
            "id": self.local_id,
            "category": self.category,
            "subcategory": self.subcategory,
            "word": self.word,
            "meaning": self.meaning,
            "example": self.example or "",
            "exampleCn": self.example_cn or "",
        }


class CustomWordCategory(Base):
    __tablename__ = "custom_word_categories"
    __table_args__ = (
        UniqueConstraint("user_id", "subcategory", name="uq_custom_word_categories_user_subcategory"),
        UniqueConstraint("user_id", "category", "subcategory", name="uq_custom_word_categories_user_key"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(50), nullable=False)
    category_name = Column(String(100), nullable=False)
    subcategory = Column(String(50), nullable=False)
    subcategory_name = Column(String(100), nullable=False)
    emoji = Column(String(16), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
