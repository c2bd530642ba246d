from sqlalchemy import JSON, Column, Integer, String, Text, UniqueConstraint
from core.database import Base
from models.word_key import WordKey


class Word(Base):
    __tablename__ = "words"
    __table_args__ = (
        UniqueConstraint("category", "subcategory", "local_id", name="uq_words_business_key"),
    )

    id = Column(Integer, primary_key=True)
    local_id = Column(Integer, nullable=False, index=True)
    category = Column(String(50), nullable=False, index=True)
    subcategory = Column(String(50), nullable=False, index=True)
    word = Column(String(100), nullable=False)
    meaning = Column(Text, nullable=False)
    phonetic = Column(String(100), nullable=False, default="")
    audio = Column(String(255), nullable=True)
    part_of_speech = Column(JSON, nullable=False, default=list)
    example = Column(Text, nullable=False, default="")
    example_cn = Column(Text, nullable=False, default="")
    example_audio = Column(String(255), nullable=True)

    @property
    def business_key(self) -> WordKey:
        return WordKey(self.category, self.subcategory, self.local_id)

    def as_dict(self) -> dict:
        return {
            "id": self.local_id,
            "category": self.category,
            "subcategory": self.subcategory,
            "word": self.word,
            "meaning": self.meaning,
            "phonetic": self.phonetic or "",
            "audio": self.audio,
            "partOfSpeech": list(self.part_of_speech or []),
            "example": self.example or "",
            "exampleCn": self.example_cn or "",
            "exampleAudio": self.example_audio,
        }


class WordCategory(Base):
    __tablename__ = "word_categories"
    __table_args__ = (
        UniqueConstraint("category", "subcategory", name="uq_word_categories_category_subcategory"),
    )

    id = Column(Integer, primary_key=True)
    category = Column(String(50), nullable=False, index=True)
    category_name = Column(String(100), nullable=False)
    subcategory = Column(String(50), nullable=False, index=True)
    subcategory_name = Column(String(100), nullable=False)
