"""Read access to a word catalog keyed by (category, subcategory, local_id).

``GlobalWordSource`` reads the shared built-in catalog. ``CustomWordSource``
reads one user's custom catalog and never sees another owner's rows.
"""
from typing import Iterable

from sqlalchemy import delete, func, not_, select, tuple_
from sqlalchemy.orm import Session

from models.custom_word import CustomWord
from models.user_word import UserWord
from models.word import Word
from models.word_key import WordKey


def word_key_clause(model, keys: Iterable[WordKey]):
    """Row-value IN over the business key; ``None`` when ``keys`` is empty."""
    values = [tuple(key) for key in keys]
    if not values:
        return None
    return tuple_(model.category, model.subcategory, model.local_id).in_(values)


class WordSource:
    model = Word

    def __init__(self, db: Session):
        self.db = db

    def _scope(self, stmt):
        return stmt

    def _filtered(self, stmt, *, category: str | None, subcategory: str | None, exclude: Iterable[WordKey]):
        stmt = self._scope(stmt)
        if category:
            stmt = stmt.where(self.model.category == category)
        if subcategory:
            stmt = stmt.where(self.model.subcategory == subcategory)
        excluded = word_key_clause(self.model, exclude)
        if excluded is not None:
            stmt = stmt.where(not_(excluded))
        return stmt

    def owns_overlay(self):
        """Correlated EXISTS matching overlays whose key is a word of this catalog."""
        stmt = select(self.model.id).where(
            self.model.category == UserWord.word_category,
            self.model.subcategory == UserWord.word_subcategory,
            self.model.local_id == UserWord.word_id,
        )
        return self._scope(stmt).exists()

    def fetch_page(
        self,
        *,
        category: str | None = None,
        subcategory: str | None = None,
        exclude: Iterable[WordKey] = (),
        skip: int = 0,
        limit: int = 20,
    ) -> list:
        stmt = self._filtered(
            select(self.model), category=category, subcategory=subcategory, exclude=exclude
        )
        stmt = (
            stmt.order_by(self.model.local_id, self.model.category, self.model.subcategory)
            .offset(skip)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def count(
        self,
        *,
        category: str | None = None,
        subcategory: str | None = None,
        exclude: Iterable[WordKey] = (),
    ) -> int:
        stmt = self._filtered(
            select(func.count(self.model.id)), category=category, subcategory=subcategory, exclude=exclude
        )
        return self.db.execute(stmt).scalar_one()

    def fetch_by_keys(self, keys: Iterable[WordKey]) -> list:
        clause = word_key_clause(self.model, keys)
        if clause is None:
            return []
        stmt = self._scope(select(self.model)).where(clause)
        return list(self.db.execute(stmt).scalars())

    def fetch_one(self, key: WordKey):
        stmt = self._scope(select(self.model)).where(
            self.model.category == key.category,
            self.model.subcategory == key.subcategory,
            self.model.local_id == key.local_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def fetch_all(self) -> list:
        stmt = self._scope(select(self.model)).order_by(
            self.model.category, self.model.subcategory, self.model.local_id
        )
        return list(self.db.execute(stmt).scalars())

    def count_by_subcategory(self, subcategories: Iterable[str]) -> dict[str, int]:
        subcategories = list(subcategories)
        if not subcategories:
            return {}
        stmt = (
            self._scope(select(self.model.subcategory, func.count(self.model.id)))
            .where(self.model.subcategory.in_(subcategories))
            .group_by(self.model.subcategory)
        )
        return {subcategory: total for subcategory, total in self.db.execute(stmt)}


class GlobalWordSource(WordSource):
    model = Word

    def subcategory_exists(self, subcategory: str) -> bool:
        stmt = select(Word.id).where(Word.subcategory == subcategory).limit(1)
        return self.db.execute(stmt).first() is not None

    def bulk_insert(self, rows: list[dict]) -> int:
        self.db.add_all(Word(**row) for row in rows)
        self.db.commit()
        return len(rows)


class CustomWordSource(WordSource):
    model = CustomWord

    def __init__(self, db: Session, owner_id: int):
        super().__init__(db)
        self.owner_id = owner_id

    def _scope(self, stmt):
        return stmt.where(CustomWord.user_id == self.owner_id)

    def add_words(self, *, category: str, subcategory: str, rows: list[dict]) -> list[CustomWord]:
        entities = [
            CustomWord(
                user_id=self.owner_id,
                local_id=row["local_id"],
                category=category,
                subcategory=subcategory,
                word=row["word"],
                meaning=row["meaning"],
                example=row.get("example"),
                example_cn=row.get("example_cn"),
            )
            for row in rows
        ]
        self.db.add_all(entities)
        self.db.flush()
        return entities

    def delete_for_category(self, *, category: str, subcategory: str) -> int:
        stmt = delete(CustomWord).where(
            CustomWord.user_id == self.owner_id,
            CustomWord.category == category,
            CustomWord.subcategory == subcategory,
        )
        return self.db.execute(stmt).rowcount
