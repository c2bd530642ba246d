from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from core.database import Base
from models.word_key import WordKey, WordStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserWord(Base):
    """Sparse per-user learning state for one word.

    Rows exist only for words the user has touched; a missing row means
    ``unmarked`` with no mistakes. The word is referenced by its business key,
    so re-importing the catalog does not orphan progress.
    """

    __tablename__ = "user_words"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "word_category", "word_subcategory", "word_id",
            name="uq_user_words_user_business_key",
        ),
        Index("ix_user_words_user_status", "user_id", "status"),
        Index("ix_user_words_user_category", "user_id", "word_category", "word_subcategory"),
        Index("ix_user_words_user_status_subcategory", "user_id", "status", "word_subcategory"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    word_category = Column(String(50), nullable=False)
    word_subcategory = Column(String(50), nullable=False)
    word_id = Column(Integer, nullable=False)
    status = Column(
        Enum(
            WordStatus,
            name="word_status",
            native_enum=False,
            values_callable=lambda statuses: [s.value for s in statuses],
            validate_strings=True,
        ),
        nullable=False,
        default=WordStatus.UNMARKED,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow, index=True)

    mistake_entries = relationship(
        "UserWordMistake",
        order_by="UserWordMistake.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def business_key(self) -> WordKey:
        return WordKey(self.word_category, self.word_subcategory, self.word_id)

    @property
    def mistakes(self) -> list[str]:
        return [entry.mistake_date for entry in self.mistake_entries]

    def replace_mistakes(self, mistakes: list[str]) -> None:
        self.mistake_entries = [
            UserWordMistake(position=position, mistake_date=value)
            for position, value in enumerate(mistakes)
        ]
        self.updated_at = _utcnow()


class UserWordMistake(Base):
    __tablename__ = "user_word_mistakes"

    id = Column(Integer, primary_key=True)
    user_word_id = Column(Integer, ForeignKey("user_words.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    mistake_date = Column(String(10), nullable=False, index=True)
