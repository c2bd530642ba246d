from models.word_key import WordKey, WordStatus
from repositories.progress_repo import ProgressRepository
from services.stats import compute_stats
from tests.conftest import create_user


def test_stats_for_untouched_catalog(db):
    user = create_user(db)
    stats = compute_stats(ProgressRepository(db), user_id=user.id, subcategory="cet4-1", total=10)
    assert stats.as_dict() == {"total": 10, "unmarked": 10, "known": 0, "unknown": 0}


def test_placeholder_overlays_count_as_unmarked(db):
    user = create_user(db)
    repo = ProgressRepository(db)
    repo.upsert_status(user.id, WordKey("cet4", "cet4-1", 1), WordStatus.KNOWN)
    repo.upsert_status(user.id, WordKey("cet4", "cet4-1", 2), WordStatus.UNKNOWN)
    repo.record_mistakes(user.id, WordKey("cet4", "cet4-1", 3), ["2024-01-01"])

    stats = compute_stats(repo, user_id=user.id, subcategory="cet4-1", total=5)

    assert stats.as_dict() == {"total": 5, "unmarked": 3, "known": 1, "unknown": 1}


def test_stats_are_scoped_to_subcategory(db):
    user = create_user(db)
    repo = ProgressRepository(db)
    repo.upsert_status(user.id, WordKey("cet4", "cet4-1", 1), WordStatus.KNOWN)
    repo.upsert_status(user.id, WordKey("cet4", "cet4-2", 1), WordStatus.KNOWN)

    scoped = compute_stats(repo, user_id=user.id, subcategory="cet4-2", total=4)
    overall = compute_stats(repo, user_id=user.id, subcategory=None, total=8)

    assert scoped.known == 1
    assert overall.known == 2
    assert overall.unmarked == 6
