from datetime import date
from typing import Literal

from pydantic import Field, constr

from models.word_key import WordKey, WordStatus
from schemas.common import CamelModel, PageIn


class WordKeyIn(CamelModel):
    category: constr(strip_whitespace=True, min_length=1, max_length=50)
    subcategory: constr(strip_whitespace=True, min_length=1, max_length=50)
    local_id: int = Field(alias="id")

    def to_key(self) -> WordKey:
        return WordKey(self.category, self.subcategory, self.local_id)


class MarkStatusIn(WordKeyIn):
    status: WordStatus


class RecordMistakesIn(WordKeyIn):
    mistakes: list[date]

    def mistake_dates(self) -> list[str]:
        return [value.isoformat() for value in self.mistakes]


class ClearMistakesIn(CamelModel):
    words: list[WordKeyIn] = Field(min_length=1)


class UserWordsQueryIn(PageIn):
    status: WordStatus | Literal["all"] | None = None
    subcategory: str | None = None


class StatusQueryIn(PageIn):
    status: WordStatus
    subcategory: str | None = None


class StatusListQueryIn(PageIn):
    limit: int = Field(default=30, ge=1)
    status_list: list[WordStatus] = Field(min_length=1)


class MistakeQueryIn(PageIn):
    limit: int = Field(default=30, ge=1)


class MistakeDatesQueryIn(MistakeQueryIn):
    dates: list[date] = Field(min_length=1)

    def date_strings(self) -> list[str]:
        return [value.isoformat() for value in self.dates]
