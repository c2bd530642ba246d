"""Shared test fixtures: in-memory SQLite, test client, catalog and auth helpers."""

import os

# config reads the environment at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-tests")
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base, get_db  # noqa: E402
from core.security import create_access_token, hash_password  # noqa: E402
from main import app  # noqa: E402
from repositories.user_repo import UserRepository  # noqa: E402
from services.word_services import WordServices  # noqa: E402

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(bind=test_engine, autoflush=False, autocommit=False)

DEFAULT_PASSWORD = "Secret123"


@pytest.fixture(autouse=True)
def setup_db():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


def _override_get_db():
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


def word_row(local_id: int, subcategory: str = "cet4-1", category: str = "cet4", **extra) -> dict:
    row = {
        "local_id": local_id,
        "category": category,
        "subcategory": subcategory,
        "word": f"word{local_id}",
        "meaning": f"meaning {local_id}",
        "phonetic": "",
        "part_of_speech": [],
        "example": "",
        "example_cn": "",
    }
    row.update(extra)
    return row


def seed_words(db, *local_ids: int, subcategory: str = "cet4-1", category: str = "cet4") -> None:
    WordServices(db).import_words([word_row(i, subcategory, category) for i in local_ids])


def create_user(db, email: str = "test@example.com", password: str = DEFAULT_PASSWORD):
    repo = UserRepository(db)
    user = repo.add(email=email, password_hash=hash_password(password), verification_code="ABC123")
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user_id: int) -> dict:
    """Helper: return Authorization header dict."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}
