import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import ConflictError, InternalError, NotFoundError
from models.custom_word import CustomWordCategory
from repositories.category_repo import CustomCategoryRepository, WordCategoryRepository
from repositories.word_source import CustomWordSource, GlobalWordSource
from services.query_planner import WordPage
from services.stats import compute_stats
from services.user_word_services import ProgressServices

logger = logging.getLogger(__name__)

DUPLICATE_CATEGORY = "A custom word list with the same category and subcategory already exists"


def describe_category(entity: CustomWordCategory, word_count: int) -> dict:
    return {
        "category": entity.category,
        "categoryName": entity.category_name,
        "subcategory": entity.subcategory,
        "subcategoryName": entity.subcategory_name,
        "emoji": entity.emoji,
        "wordCount": word_count,
    }


class CustomWordServices(ProgressServices):
    """Custom word lists; every query is bound to the owning user."""

    def __init__(self, db: Session, user_id: int):
        super().__init__(db, CustomWordSource(db, user_id))
        self.user_id = user_id
        self.categories = CustomCategoryRepository(db)

    def _require_category(self, *, category: str, subcategory: str) -> CustomWordCategory:
        entity = self.categories.get(user_id=self.user_id, category=category, subcategory=subcategory)
        if entity is None:
            raise NotFoundError("Word list does not exist or is not accessible")
        return entity

    def _collides_with_catalog(self, subcategory: str) -> bool:
        return (
            WordCategoryRepository(self.db).subcategory_exists(subcategory)
            or GlobalWordSource(self.db).subcategory_exists(subcategory)
        )

    def create_category(
        self,
        *,
        category: str,
        category_name: str,
        subcategory: str,
        subcategory_name: str,
        emoji: str,
        words: list[dict],
    ) -> dict:
        if self.categories.get_by_subcategory(user_id=self.user_id, subcategory=subcategory):
            raise ConflictError(DUPLICATE_CATEGORY)
        if self._collides_with_catalog(subcategory):
            raise ConflictError("Subcategory code is already used by the built-in catalog")

        try:
            entity = self.categories.add(
                user_id=self.user_id,
                category=category,
                category_name=category_name,
                subcategory=subcategory,
                subcategory_name=subcategory_name,
                emoji=emoji,
            )
            self.source.add_words(category=category, subcategory=subcategory, rows=words)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Custom category %s/%s for user %s rejected: %s", category, subcategory, self.user_id, exc.orig)
            raise ConflictError(DUPLICATE_CATEGORY) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to create custom category %s/%s for user %s", category, subcategory, self.user_id)
            raise InternalError("Failed to create custom word list") from exc

        self.db.refresh(entity)
        logger.info("User %s created custom category %s/%s with %d words", self.user_id, category, subcategory, len(words))
        return describe_category(entity, len(words))

    def delete_category(self, *, category: str, subcategory: str) -> None:
        self._require_category(category=category, subcategory=subcategory)
        try:
            words = self.source.delete_for_category(category=category, subcategory=subcategory)
            overlays = self.progress.delete_for_category(self.user_id, category=category, subcategory=subcategory)
            self.categories.delete(user_id=self.user_id, category=category, subcategory=subcategory)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to delete custom category %s/%s for user %s", category, subcategory, self.user_id)
            raise InternalError("Failed to delete custom word list") from exc
        logger.info(
            "User %s deleted custom category %s/%s (%d words, %d progress records)",
            self.user_id, category, subcategory, words, overlays,
        )

    def list_categories(self) -> list[dict]:
        entities = self.categories.list_for_user(self.user_id)
        counts = self.source.count_by_subcategory(entity.subcategory for entity in entities)
        return [describe_category(entity, counts.get(entity.subcategory, 0)) for entity in entities]

    def list_words(self, *, category: str, subcategory: str, page: int = 1, limit: int = 20) -> WordPage:
        self._require_category(category=category, subcategory=subcategory)
        result = self.planner.catalog_page(
            user_id=self.user_id, category=category, subcategory=subcategory, page=page, limit=limit
        )
        result.stats = compute_stats(
            self.progress, user_id=self.user_id, subcategory=subcategory, total=result.total,
            scope=self.source.owns_overlay(),
        ).as_dict()
        return result
