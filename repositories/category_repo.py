from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from models.custom_word import CustomWordCategory
from models.word import WordCategory


class WordCategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[WordCategory]:
        stmt = select(WordCategory).order_by(WordCategory.id)
        return list(self.db.execute(stmt).scalars())

    def subcategory_exists(self, subcategory: str) -> bool:
        stmt = select(WordCategory.id).where(WordCategory.subcategory == subcategory).limit(1)
        return self.db.execute(stmt).first() is not None

    def bulk_insert(self, rows: list[dict]) -> int:
        self.db.add_all(WordCategory(**row) for row in rows)
        self.db.commit()
        return len(rows)


class CustomCategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: int) -> list[CustomWordCategory]:
        stmt = (
            select(CustomWordCategory)
            .where(CustomWordCategory.user_id == user_id)
            .order_by(CustomWordCategory.created_at.desc(), CustomWordCategory.id.desc())
        )
        return list(self.db.execute(stmt).scalars())

    def get(self, *, user_id: int, category: str, subcategory: str) -> CustomWordCategory | None:
        stmt = select(CustomWordCategory).where(
            CustomWordCategory.user_id == user_id,
            CustomWordCategory.category == category,
            CustomWordCategory.subcategory == subcategory,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_subcategory(self, *, user_id: int, subcategory: str) -> CustomWordCategory | None:
        stmt = select(CustomWordCategory).where(
            CustomWordCategory.user_id == user_id,
            CustomWordCategory.subcategory == subcategory,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def add(
        self,
        *,
        user_id: int,
        category: str,
        category_name: str,
        subcategory: str,
        subcategory_name: str,
        emoji: str,
    ) -> CustomWordCategory:
        entity = CustomWordCategory(
            user_id=user_id,
            category=category,
            category_name=category_name,
            subcategory=subcategory,
            subcategory_name=subcategory_name,
            emoji=emoji,
        )
        self.db.add(entity)
        self.db.flush()
        return entity

    def delete(self, *, user_id: int, category: str, subcategory: str) -> int:
        stmt = delete(CustomWordCategory).where(
            CustomWordCategory.user_id == user_id,
            CustomWordCategory.category == category,
            CustomWordCategory.subcategory == subcategory,
        )
        return self.db.execute(stmt).rowcount
