import logging
from dataclasses import asdict, dataclass

from models.word_key import WordStatus
from repositories.progress_repo import ProgressRepository

logger = logging.getLogger(__name__)


@dataclass
class WordStats:
    total: int
    unmarked: int
    known: int
    unknown: int

    def as_dict(self) -> dict:
        return asdict(self)


def compute_stats(
    progress: ProgressRepository,
    *,
    user_id: int,
    subcategory: str | None,
    total: int,
    scope=None,
) -> WordStats:
    """Known/unknown come from the overlay; unmarked is whatever is left of ``total``.

    ``scope`` restricts the overlay to the catalog ``total`` was counted from.
    """
    counts = progress.status_counts(user_id, subcategory=subcategory, scope=scope)
    known = counts.get(WordStatus.KNOWN, 0)
    unknown = counts.get(WordStatus.UNKNOWN, 0)
    unmarked = total - known - unknown

    placeholders = counts.get(WordStatus.UNMARKED, 0)
    if placeholders:
        logger.debug("User %s has %d unmarked overlays holding mistakes only", user_id, placeholders)
    if unmarked < 0:
        logger.warning(
            "Overlay counts exceed catalog size for user %s subcategory %s: total=%d known=%d unknown=%d",
            user_id, subcategory, total, known, unknown,
        )
    return WordStats(total=total, unmarked=unmarked, known=known, unknown=unknown)
