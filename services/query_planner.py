"""Turn a status filter into queries against a word catalog and the overlay.

``unmarked``           the catalog drives; words with a non-unmarked overlay
                       are excluded by key and the remainder is paged.
``unknown``/``known``  the overlay drives; its page is joined back to the
                       catalog by key. The total comes from the overlay, so a
                       page can be short when catalog rows were removed.
``None`` / ``all``     catalog page merged with whatever overlays exist.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Iterable

from core.errors import InvalidInputError
from models.word_key import WordKey, WordStatus
from repositories.progress_repo import ProgressRepository
from repositories.word_source import WordSource
from services.merge import ViewRecord, merge_by_key, merge_by_recency

logger = logging.getLogger(__name__)

ALL = "all"


@dataclass
class WordPage:
    words: list[ViewRecord]
    total: int
    page: int
    limit: int
    stats: dict | None = field(default=None)

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def pagination(self) -> dict:
        return {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.pages}

    def as_dict(self) -> dict:
        data = {"words": self.words, "pagination": self.pagination()}
        if self.stats is not None:
            data["stats"] = self.stats
        return data


def parse_status(value) -> WordStatus:
    if isinstance(value, WordStatus):
        return value
    try:
        return WordStatus(value)
    except ValueError as exc:
        raise InvalidInputError("Invalid status value") from exc


def _skip(page: int, limit: int) -> int:
    if page < 1 or limit < 1:
        raise InvalidInputError("page and limit must be positive")
    return (page - 1) * limit


def _in_key_order(words: Iterable, keys: list[WordKey]) -> list:
    by_key = {word.business_key: word for word in words}
    return [by_key[key] for key in keys if key in by_key]


class WordQueryPlanner:
    def __init__(self, source: WordSource, progress: ProgressRepository):
        self.source = source
        self.progress = progress

    def plan(
        self,
        *,
        user_id: int,
        status=None,
        subcategory: str | None = None,
        category: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> WordPage:
        if status is None or status == ALL:
            return self.catalog_page(
                user_id=user_id, category=category, subcategory=subcategory, page=page, limit=limit
            )

        status = parse_status(status)
        if status is WordStatus.UNMARKED:
            return self.unmarked_page(user_id=user_id, subcategory=subcategory, page=page, limit=limit)
        return self.marked_page(user_id=user_id, status=status, subcategory=subcategory, page=page, limit=limit)

    def catalog_page(
        self,
        *,
        user_id: int,
        category: str | None = None,
        subcategory: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> WordPage:
        skip = _skip(page, limit)
        words = self.source.fetch_page(category=category, subcategory=subcategory, skip=skip, limit=limit)
        total = self.source.count(category=category, subcategory=subcategory)
        overlays = self.progress.fetch_by_keys(user_id, [word.business_key for word in words])
        return WordPage(merge_by_key(words, overlays), total, page, limit)

    def unmarked_page(self, *, user_id: int, subcategory: str | None, page: int, limit: int) -> WordPage:
        skip = _skip(page, limit)
        excluded = self.progress.fetch_marked_keys(
            user_id, subcategory=subcategory, scope=self.source.owns_overlay()
        )
        words = self.source.fetch_page(subcategory=subcategory, exclude=excluded, skip=skip, limit=limit)
        total = self.source.count(subcategory=subcategory, exclude=excluded)
        # unmarked words are always rendered with an empty overlay
        return WordPage(merge_by_key(words, []), total, page, limit)

    def marked_page(
        self,
        *,
        user_id: int,
        status: WordStatus,
        subcategory: str | None,
        page: int,
        limit: int,
    ) -> WordPage:
        skip = _skip(page, limit)
        # only overlays whose word lives in this catalog
        scope = self.source.owns_overlay()
        overlays = self.progress.fetch_page(
            user_id, status=status, subcategory=subcategory, scope=scope, skip=skip, limit=limit
        )
        total = self.progress.count(user_id, status=status, subcategory=subcategory, scope=scope)
        keys = [overlay.business_key for overlay in overlays]
        words = _in_key_order(self.source.fetch_by_keys(keys), keys)
        if len(words) < len(keys):
            logger.warning(
                "User %s has %d %s overlays without a catalog word", user_id, len(keys) - len(words), status.value
            )
        return WordPage(merge_by_key(words, overlays), total, page, limit)


class MixedSourceQuery:
    """Recency-ordered feeds over the global catalog plus one user's custom catalog."""

    def __init__(self, sources: list[WordSource], progress: ProgressRepository):
        self.sources = sources
        self.progress = progress

    def _join(self, overlays: list) -> list[ViewRecord]:
        keys = [overlay.business_key for overlay in overlays]
        words: list = []
        if keys:
            for source in self.sources:
                words.extend(source.fetch_by_keys(keys))
        return merge_by_recency(words, overlays)

    def by_statuses(self, *, user_id: int, statuses: Iterable, page: int, limit: int) -> WordPage:
        parsed = list(dict.fromkeys(parse_status(status) for status in statuses))
        if not parsed:
            raise InvalidInputError("statusList must not be empty")
        skip = _skip(page, limit)
        overlays = self.progress.fetch_by_status_set(user_id, parsed, skip=skip, limit=limit)
        total = self.progress.count_by_status_set(user_id, parsed)
        return WordPage(self._join(overlays), total, page, limit)

    def with_mistakes(
        self,
        *,
        user_id: int,
        page: int,
        limit: int,
        dates: Iterable[str] | None = None,
    ) -> WordPage:
        skip = _skip(page, limit)
        if dates is not None:
            dates = list(dates)
        overlays = self.progress.fetch_with_mistakes(user_id, dates=dates, skip=skip, limit=limit)
        total = self.progress.count_with_mistakes(user_id, dates=dates)
        return WordPage(self._join(overlays), total, page, limit)
