"""Tests for the sparse progress overlay."""

from models.word_key import WordKey, WordStatus
from repositories.progress_repo import ProgressRepository
from tests.conftest import TestSession, create_user

KEY = WordKey("cet4", "cet4-1", 1)
OTHER = WordKey("cet4", "cet4-1", 2)


def test_unmarked_on_absent_key_creates_nothing(db):
    user = create_user(db)
    repo = ProgressRepository(db)

    assert repo.upsert_status(user.id, KEY, WordStatus.UNMARKED) is None
    assert repo.count(user.id) == 0


def test_upsert_status_creates_lazily_and_is_idempotent(db):
    user = create_user(db)
    repo = ProgressRepository(db)

    first = repo.upsert_status(user.id, KEY, WordStatus.KNOWN)
    second = repo.upsert_status(user.id, KEY, WordStatus.KNOWN)

    assert first.id == second.id
    assert repo.count(user.id) == 1
    assert repo.fetch_one(user.id, KEY).status is WordStatus.KNOWN


def test_upsert_status_switches_status(db):
    user = create_user(db)
    repo = ProgressRepository(db)

    repo.upsert_status(user.id, KEY, WordStatus.KNOWN)
    repo.upsert_status(user.id, KEY, WordStatus.UNKNOWN)

    assert repo.status_counts(user.id) == {WordStatus.UNKNOWN: 1}


def test_unmarked_without_mistakes_removes_overlay(db):
    user = create_user(db)
    repo = ProgressRepository(db)

    repo.upsert_status(user.id, KEY, WordStatus.KNOWN)
    assert repo.upsert_status(user.id, KEY, WordStatus.UNMARKED) is None
    assert repo.fetch_one(user.id, KEY) is None


def test_unmarked_with_mistakes_keeps_overlay(db):
    user = create_user(db)
    repo = ProgressRepository(db)

    repo.upsert_status(user.id, KEY, WordStatus.UNKNOWN)
    repo.record_mistakes(user.id, KEY, ["2024-03-01"])
    entity = repo.upsert_status(user.id, KEY, WordStatus.UNMARKED)

    assert entity is not None
    assert entity.status is WordStatus.UNMARKED
    assert entity.mistakes == ["2024-03-01"]


def test_record_mistakes_on_absent_key_creates_unmarked_overlay(db):
    user = create_user(db)
    repo = ProgressRepository(db)

    entity = repo.record_mistakes(user.id, KEY, ["2024-03-01", "2024-03-02"])

    assert entity.status is WordStatus.UNMARKED
    assert entity.mistakes == ["2024-03-01", "2024-03-02"]


def test_record_mistakes_replaces_whole_list_and_keeps_status(db):
    user = create_user(db)
    repo = ProgressRepository(db)

    repo.upsert_status(user.id, KEY, WordStatus.KNOWN)
    repo.record_mistakes(user.id, KEY, ["2024-03-01"])
    entity = repo.record_mistakes(user.id, KEY, ["2024-03-05", "2024-03-01"])

    assert entity.status is WordStatus.KNOWN
    assert entity.mistakes == ["2024-03-05", "2024-03-01"]


def test_clear_mistakes_deletes_placeholder_overlay(db):
    user = create_user(db)
    repo = ProgressRepository(db)
    repo.record_mistakes(user.id, KEY, ["2024-03-01"])

    result = repo.clear_mistakes_batch(user.id, [KEY])

    assert (result.total, result.deleted, result.updated, result.not_found, result.failed) == (1, 1, 0, 0, 0)
    assert repo.fetch_one(user.id, KEY) is None


def test_clear_mistakes_keeps_marked_overlay(db):
    user = create_user(db)
    repo = ProgressRepository(db)
    repo.upsert_status(user.id, KEY, WordStatus.UNKNOWN)
    repo.record_mistakes(user.id, KEY, ["2024-03-01"])

    result = repo.clear_mistakes_batch(user.id, [KEY, OTHER])

    assert result.total == 2
    assert result.updated == 1
    assert result.deleted == 0
    assert result.not_found == 1
    entity = repo.fetch_one(user.id, KEY)
    assert entity.status is WordStatus.UNKNOWN
    assert entity.mistakes == []


def test_overlays_are_isolated_per_user(db):
    alice = create_user(db, "alice@example.com")
    bob = create_user(db, "bob@example.com")
    repo = ProgressRepository(db)

    repo.upsert_status(alice.id, KEY, WordStatus.KNOWN)

    assert repo.fetch_one(bob.id, KEY) is None
    assert repo.count_learned(bob.id) == 0
    assert repo.count_learned(alice.id) == 1


def test_mistake_filters_by_date(db):
    user = create_user(db)
    repo = ProgressRepository(db)
    repo.record_mistakes(user.id, KEY, ["2024-03-01"])
    repo.record_mistakes(user.id, OTHER, ["2024-03-02"])

    assert repo.count_with_mistakes(user.id) == 2
    assert repo.count_with_mistakes(user.id, dates=["2024-03-02"]) == 1
    found = repo.fetch_with_mistakes(user.id, dates=["2024-03-02"])
    assert [overlay.business_key for overlay in found] == [OTHER]


def test_fetch_marked_keys_skips_placeholders(db):
    user = create_user(db)
    repo = ProgressRepository(db)
    repo.upsert_status(user.id, KEY, WordStatus.KNOWN)
    repo.record_mistakes(user.id, OTHER, ["2024-03-02"])

    assert repo.fetch_marked_keys(user.id) == {KEY}


def test_empty_mistakes_on_placeholder_removes_overlay(db):
    user = create_user(db)
    repo = ProgressRepository(db)
    repo.record_mistakes(user.id, KEY, ["2024-03-01"])

    assert repo.record_mistakes(user.id, KEY, []) is None
    assert repo.record_mistakes(user.id, OTHER, []) is None
    assert repo.count(user.id) == 0


def _stale_first_lookup(monkeypatch, repo):
    """The first ``fetch_one`` misses, as if another request had not committed yet."""
    real_fetch_one = repo.fetch_one
    calls = []

    def fetch_one(user_id, key):
        calls.append(key)
        if len(calls) == 1:
            return None
        return real_fetch_one(user_id, key)

    monkeypatch.setattr(repo, "fetch_one", fetch_one)


def _create_from_other_session(user_id, status):
    other = TestSession()
    try:
        ProgressRepository(other).upsert_status(user_id, KEY, status)
    finally:
        other.close()


def test_concurrent_create_becomes_status_update(db, monkeypatch):
    user = create_user(db)
    repo = ProgressRepository(db)
    _create_from_other_session(user.id, WordStatus.KNOWN)
    _stale_first_lookup(monkeypatch, repo)

    entity = repo.upsert_status(user.id, KEY, WordStatus.UNKNOWN)

    assert entity.status is WordStatus.UNKNOWN
    assert repo.count(user.id) == 1


def test_concurrent_create_becomes_mistakes_update(db, monkeypatch):
    user = create_user(db)
    repo = ProgressRepository(db)
    _create_from_other_session(user.id, WordStatus.KNOWN)
    _stale_first_lookup(monkeypatch, repo)

    entity = repo.record_mistakes(user.id, KEY, ["2024-03-01"])

    assert entity.status is WordStatus.KNOWN
    assert entity.mistakes == ["2024-03-01"]
    assert repo.count(user.id) == 1


def test_clear_mistakes_counts_repeated_keys_once(db):
    user = create_user(db)
    repo = ProgressRepository(db)
    repo.record_mistakes(user.id, KEY, ["2024-03-01"])

    result = repo.clear_mistakes_batch(user.id, [KEY, KEY, OTHER])

    assert (result.total, result.deleted, result.updated, result.not_found, result.failed) == (2, 1, 0, 1, 0)
    assert result.total == result.deleted + result.updated + result.not_found + result.failed
