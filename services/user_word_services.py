import logging

from sqlalchemy.orm import Session

from core.errors import InvalidInputError, NotFoundError
from models.user_word import UserWord
from models.word_key import WordKey
from repositories.progress_repo import ClearMistakesResult, ProgressRepository
from repositories.word_source import CustomWordSource, GlobalWordSource, WordSource
from services.query_planner import ALL, MixedSourceQuery, WordPage, WordQueryPlanner, parse_status
from services.stats import compute_stats

logger = logging.getLogger(__name__)


class ProgressServices:
    """Status and mistake writes shared by the global and custom catalogs."""

    def __init__(self, db: Session, source: WordSource):
        self.db = db
        self.source = source
        self.progress = ProgressRepository(db)
        self.planner = WordQueryPlanner(source, self.progress)

    def _require_word(self, key: WordKey) -> None:
        if self.source.fetch_one(key) is None:
            raise NotFoundError("Word does not exist")

    def mark_status(self, *, user_id: int, key: WordKey, status) -> UserWord | None:
        status = parse_status(status)
        self._require_word(key)
        return self.progress.upsert_status(user_id, key, status)

    def record_mistakes(self, *, user_id: int, key: WordKey, mistakes: list[str]) -> UserWord | None:
        self._require_word(key)
        return self.progress.record_mistakes(user_id, key, list(mistakes))

    def words_by_status(
        self,
        *,
        user_id: int,
        status,
        subcategory: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> WordPage:
        if status is None or status == ALL:
            raise InvalidInputError("Invalid status value")
        return self.planner.plan(user_id=user_id, status=status, subcategory=subcategory, page=page, limit=limit)


class UserWordServices(ProgressServices):
    def __init__(self, db: Session):
        super().__init__(db, GlobalWordSource(db))

    def _feed(self, user_id: int) -> MixedSourceQuery:
        return MixedSourceQuery([self.source, CustomWordSource(self.db, user_id)], self.progress)

    def totals(self, *, user_id: int) -> dict:
        return {
            "mistake": self.progress.count_with_mistakes(user_id),
            "learned": self.progress.count_learned(user_id),
        }

    def list_words(
        self,
        *,
        user_id: int,
        subcategory: str | None = None,
        status=None,
        page: int = 1,
        limit: int = 20,
    ) -> WordPage:
        result = self.planner.plan(user_id=user_id, status=status, subcategory=subcategory, page=page, limit=limit)
        catalog_total = self.source.count(subcategory=subcategory)
        result.stats = compute_stats(
            self.progress, user_id=user_id, subcategory=subcategory, total=catalog_total,
            scope=self.source.owns_overlay(),
        ).as_dict()
        return result

    def words_by_status_list(self, *, user_id: int, statuses: list, page: int = 1, limit: int = 20) -> WordPage:
        return self._feed(user_id).by_statuses(user_id=user_id, statuses=statuses, page=page, limit=limit)

    def mistake_words(self, *, user_id: int, page: int = 1, limit: int = 20) -> WordPage:
        return self._feed(user_id).with_mistakes(user_id=user_id, page=page, limit=limit)

    def mistake_words_by_dates(self, *, user_id: int, dates: list[str], page: int = 1, limit: int = 20) -> WordPage:
        if not dates:
            raise InvalidInputError("dates must be a non-empty list")
        return self._feed(user_id).with_mistakes(user_id=user_id, page=page, limit=limit, dates=dates)

    def clear_mistakes(self, *, user_id: int, keys: list[WordKey]) -> ClearMistakesResult:
        if not keys:
            raise InvalidInputError("words must be a non-empty list")
        result = self.progress.clear_mistakes_batch(user_id, keys)
        logger.info(
            "Cleared mistakes for user %s: total=%d deleted=%d updated=%d not_found=%d failed=%d",
            user_id, result.total, result.deleted, result.updated, result.not_found, result.failed,
        )
        return result
