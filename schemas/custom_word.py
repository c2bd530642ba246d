from pydantic import Field, constr, field_validator

from schemas.common import CamelModel, PageIn


class CustomWordIn(CamelModel):
    local_id: int = Field(alias="id")
    word: constr(strip_whitespace=True, min_length=1, max_length=100)
    meaning: constr(strip_whitespace=True, min_length=1)
    example: str | None = None
    example_cn: str | None = None

    @field_validator("example", "example_cn", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None):
        if value is None:
            return None
        if isinstance(value, str):
            trimmed = value.strip()
            return trimmed or None
        return value


class CustomCategoryKeyIn(CamelModel):
    category: constr(strip_whitespace=True, min_length=1, max_length=50)
    subcategory: constr(strip_whitespace=True, min_length=1, max_length=50)


class CustomCategoryCreateIn(CustomCategoryKeyIn):
    category_name: constr(strip_whitespace=True, min_length=1, max_length=100)
    subcategory_name: constr(strip_whitespace=True, min_length=1, max_length=100)
    emoji: constr(strip_whitespace=True, min_length=1, max_length=16)
    words: list[CustomWordIn] = Field(default_factory=list)

    @field_validator("words")
    @classmethod
    def _unique_ids(cls, value: list[CustomWordIn]) -> list[CustomWordIn]:
        ids = [item.local_id for item in value]
        if len(ids) != len(set(ids)):
            raise ValueError("word ids must be unique within a word list")
        return value

    def word_rows(self) -> list[dict]:
        return [item.model_dump(include={"local_id", "word", "meaning", "example", "example_cn"}) for item in self.words]


class CustomWordsQueryIn(CustomCategoryKeyIn, PageIn):
    pass
