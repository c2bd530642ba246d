"""Sparse per-user progress overlay.

A ``UserWord`` row is created only when a word leaves the default state
(status other than ``unmarked``, or a recorded mistake). Lookups always go
through the business key ``(word_category, word_subcategory, word_id)``.
"""
import logging
from dataclasses import dataclass
from typing import Iterable

from sqlalchemy import delete, func, select, tuple_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import ConflictError
from models.user_word import UserWord, UserWordMistake
from models.word_key import WordKey, WordStatus

logger = logging.getLogger(__name__)


@dataclass
class ClearMistakesResult:
    total: int = 0
    deleted: int = 0
    updated: int = 0
    not_found: int = 0
    failed: int = 0


def overlay_key_clause(keys: Iterable[WordKey]):
    values = [tuple(key) for key in keys]
    if not values:
        return None
    return tuple_(UserWord.word_category, UserWord.word_subcategory, UserWord.word_id).in_(values)


class ProgressRepository:
    def __init__(self, db: Session):
        self.db = db

    def _owned(self, stmt, user_id: int):
        return stmt.where(UserWord.user_id == user_id)

    def _with_filters(self, stmt, *, status: WordStatus | None, subcategory: str | None, scope=None):
        if status is not None:
            stmt = stmt.where(UserWord.status == status)
        if subcategory:
            stmt = stmt.where(UserWord.word_subcategory == subcategory)
        if scope is not None:
            stmt = stmt.where(scope)
        return stmt

    def _mistake_filter(self, stmt, dates: Iterable[str] | None):
        if dates is None:
            return stmt.where(UserWord.mistake_entries.any())
        return stmt.where(UserWord.mistake_entries.any(UserWordMistake.mistake_date.in_(list(dates))))

    # reads

    def fetch_one(self, user_id: int, key: WordKey) -> UserWord | None:
        stmt = self._owned(select(UserWord), user_id).where(
            UserWord.word_category == key.category,
            UserWord.word_subcategory == key.subcategory,
            UserWord.word_id == key.local_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def fetch_page(
        self,
        user_id: int,
        *,
        status: WordStatus | None = None,
        subcategory: str | None = None,
        scope=None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[UserWord]:
        stmt = self._with_filters(
            self._owned(select(UserWord), user_id), status=status, subcategory=subcategory, scope=scope
        )
        stmt = stmt.order_by(UserWord.id).offset(skip).limit(limit)
        return list(self.db.execute(stmt).scalars())

    def count(
        self,
        user_id: int,
        *,
        status: WordStatus | None = None,
        subcategory: str | None = None,
        scope=None,
    ) -> int:
        stmt = self._with_filters(
            self._owned(select(func.count(UserWord.id)), user_id), status=status, subcategory=subcategory, scope=scope
        )
        return self.db.execute(stmt).scalar_one()

    def fetch_by_keys(self, user_id: int, keys: Iterable[WordKey]) -> list[UserWord]:
        clause = overlay_key_clause(keys)
        if clause is None:
            return []
        stmt = self._owned(select(UserWord), user_id).where(clause)
        return list(self.db.execute(stmt).scalars())

    def fetch_marked_keys(self, user_id: int, *, subcategory: str | None = None, scope=None) -> set[WordKey]:
        stmt = self._owned(
            select(UserWord.word_category, UserWord.word_subcategory, UserWord.word_id), user_id
        ).where(UserWord.status != WordStatus.UNMARKED)
        stmt = self._with_filters(stmt, status=None, subcategory=subcategory, scope=scope)
        return {WordKey(*row) for row in self.db.execute(stmt)}

    def fetch_by_status_set(
        self,
        user_id: int,
        statuses: Iterable[WordStatus],
        *,
        skip: int = 0,
        limit: int = 20,
    ) -> list[UserWord]:
        stmt = (
            self._owned(select(UserWord), user_id)
            .where(UserWord.status.in_(list(statuses)))
            .order_by(UserWord.updated_at.desc(), UserWord.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def count_by_status_set(self, user_id: int, statuses: Iterable[WordStatus]) -> int:
        stmt = self._owned(select(func.count(UserWord.id)), user_id).where(UserWord.status.in_(list(statuses)))
        return self.db.execute(stmt).scalar_one()

    def fetch_with_mistakes(
        self,
        user_id: int,
        *,
        dates: Iterable[str] | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[UserWord]:
        stmt = self._mistake_filter(self._owned(select(UserWord), user_id), dates)
        stmt = stmt.order_by(UserWord.updated_at.desc(), UserWord.id.desc()).offset(skip).limit(limit)
        return list(self.db.execute(stmt).scalars())

    def count_with_mistakes(self, user_id: int, *, dates: Iterable[str] | None = None) -> int:
        stmt = self._mistake_filter(self._owned(select(func.count(UserWord.id)), user_id), dates)
        return self.db.execute(stmt).scalar_one()

    def count_learned(self, user_id: int) -> int:
        stmt = self._owned(select(func.count(UserWord.id)), user_id).where(UserWord.status != WordStatus.UNMARKED)
        return self.db.execute(stmt).scalar_one()

    def status_counts(self, user_id: int, *, subcategory: str | None = None, scope=None) -> dict[WordStatus, int]:
        stmt = self._owned(select(UserWord.status, func.count(UserWord.id)), user_id)
        stmt = self._with_filters(stmt, status=None, subcategory=subcategory, scope=scope)
        stmt = stmt.group_by(UserWord.status)
        return {WordStatus(status): total for status, total in self.db.execute(stmt)}

    # writes

    def _create(self, user_id: int, key: WordKey, *, status: WordStatus, mistakes: list[str]) -> UserWord | None:
        entity = UserWord(
            user_id=user_id,
            word_category=key.category,
            word_subcategory=key.subcategory,
            word_id=key.local_id,
            status=status,
        )
        entity.replace_mistakes(mistakes)
        self.db.add(entity)
        try:
            self.db.commit()
        except IntegrityError:
            # a concurrent request created the same overlay first
            self.db.rollback()
            logger.warning("Overlay for user %s key %s already exists, retrying as update", user_id, key)
            return None
        self.db.refresh(entity)
        return entity

    def _reload_after_conflict(self, user_id: int, key: WordKey) -> UserWord:
        entity = self.fetch_one(user_id, key)
        if entity is None:
            raise ConflictError("Word progress was modified concurrently, please retry")
        return entity

    def upsert_status(self, user_id: int, key: WordKey, status: WordStatus) -> UserWord | None:
        entity = self.fetch_one(user_id, key)
        if entity is None:
            if status is WordStatus.UNMARKED:
                return None
            created = self._create(user_id, key, status=status, mistakes=[])
            if created is not None:
                return created
            entity = self._reload_after_conflict(user_id, key)

        if status is WordStatus.UNMARKED and not entity.mistake_entries:
            self.db.delete(entity)
            self.db.commit()
            return None

        entity.status = status
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def record_mistakes(self, user_id: int, key: WordKey, mistakes: list[str]) -> UserWord | None:
        """Replace the overlay's mistakes with ``mistakes``; the caller sends the full list."""
        entity = self.fetch_one(user_id, key)
        if entity is None:
            if not mistakes:
                return None
            created = self._create(user_id, key, status=WordStatus.UNMARKED, mistakes=mistakes)
            if created is not None:
                return created
            entity = self._reload_after_conflict(user_id, key)

        if not mistakes and entity.status is WordStatus.UNMARKED:
            self.db.delete(entity)
            self.db.commit()
            return None

        entity.replace_mistakes(mistakes)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def clear_mistakes_batch(self, user_id: int, keys: Iterable[WordKey]) -> ClearMistakesResult:
        # duplicate keys count once
        unique_keys = list(dict.fromkeys(keys))
        overlays = self.fetch_by_keys(user_id, unique_keys)
        result = ClearMistakesResult(total=len(unique_keys), not_found=len(unique_keys) - len(overlays))

        for overlay in overlays:
            key = overlay.business_key
            try:
                if overlay.status is WordStatus.UNMARKED:
                    self.db.delete(overlay)
                    deleted = True
                else:
                    overlay.replace_mistakes([])
                    deleted = False
                self.db.commit()
            except SQLAlchemyError:
                self.db.rollback()
                result.failed += 1
                logger.exception("Failed to clear mistakes for user %s key %s", user_id, key)
                continue
            if deleted:
                result.deleted += 1
            else:
                result.updated += 1
        return result

    def delete_for_category(self, user_id: int, *, category: str, subcategory: str) -> int:
        """Remove every overlay of ``user_id`` under one category; caller owns the transaction."""
        overlay_ids = self._owned(select(UserWord.id), user_id).where(
            UserWord.word_category == category,
            UserWord.word_subcategory == subcategory,
        )
        self.db.execute(
            delete(UserWordMistake)
            .where(UserWordMistake.user_word_id.in_(overlay_ids))
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(
            delete(UserWord)
            .where(
                UserWord.user_id == user_id,
                UserWord.word_category == category,
                UserWord.word_subcategory == subcategory,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
