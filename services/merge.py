"""Join catalog words with progress overlays by business key.

Both functions are storage-agnostic: words only need ``business_key`` and
``as_dict()``; overlays need ``business_key``, ``status``, ``mistakes`` and
``updated_at``.
"""
import logging
from typing import Any, Sequence

from core.errors import InternalError
from models.word_key import WordKey, WordStatus

logger = logging.getLogger(__name__)

ViewRecord = dict[str, Any]


def _status_value(status) -> str:
    return status.value if isinstance(status, WordStatus) else str(status)


def index_overlays(overlays: Sequence) -> dict[WordKey, Any]:
    by_key: dict[WordKey, Any] = {}
    for overlay in overlays:
        key = overlay.business_key
        if key in by_key:
            logger.error("Duplicate progress overlay for key %s", key)
            raise InternalError("Duplicate progress record for one word")
        by_key[key] = overlay
    return by_key


def view_record(word, overlay=None) -> ViewRecord:
    record = word.as_dict()
    if overlay is None:
        record["status"] = WordStatus.UNMARKED.value
        record["mistakes"] = []
    else:
        record["status"] = _status_value(overlay.status)
        record["mistakes"] = list(overlay.mistakes)
    return record


def merge_by_key(words: Sequence, overlays: Sequence) -> list[ViewRecord]:
    """One view record per word, in word order; unmatched words default to unmarked."""
    by_key = index_overlays(overlays)
    return [view_record(word, by_key.get(word.business_key)) for word in words]


def merge_by_recency(words: Sequence, overlays: Sequence) -> list[ViewRecord]:
    """Like ``merge_by_key`` but ordered by ``overlay.updated_at`` descending.

    Ties keep the overlay input order. Words without an overlay go last, in
    their input order. A word key seen twice keeps its first occurrence.
    """
    by_key = index_overlays(overlays)
    position = {key: index for index, key in enumerate(by_key)}

    matched: list[tuple[Any, Any]] = []
    unmatched: list[Any] = []
    seen: set[WordKey] = set()
    for word in words:
        key = word.business_key
        if key in seen:
            logger.warning("Word key %s present in more than one catalog, keeping the first", key)
            continue
        seen.add(key)
        overlay = by_key.get(key)
        if overlay is None:
            unmatched.append(word)
        else:
            matched.append((word, overlay))

    matched.sort(key=lambda pair: position[pair[1].business_key])
    # list.sort is stable with reverse=True, so equal timestamps keep overlay order
    matched.sort(key=lambda pair: pair[1].updated_at, reverse=True)

    return [view_record(word, overlay) for word, overlay in matched] + [
        view_record(word) for word in unmatched
    ]
