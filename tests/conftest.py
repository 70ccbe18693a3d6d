"""
Pytest configuration and fixtures.

Every test runs against a fresh in-memory SQLite database wired into the
FastAPI app through a get_db override.
"""

import os

# Must be set before the application settings are loaded
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from aptiquest.core.auth import create_access_token
from aptiquest.core.database import Base, get_db
from aptiquest.core.ids import new_id
from aptiquest.main import app
from aptiquest.repositories.question_repository import QuestionRepository
from aptiquest.repositories.user_repository import UserRepository

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
# Objects created by fixtures stay readable after the app deletes their rows
FixtureSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = FixtureSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


def auth_headers(role: str, username: str = None, user_id: str = None) -> dict:
    token = create_access_token(user_id or new_id(), username or f"test-{role}", role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def staff_headers():
    return auth_headers("faculty", "prof")


@pytest.fixture
def admin_headers():
    return auth_headers("admin", "root")


@pytest.fixture
def student_headers():
    return auth_headers("student", "alice")


@pytest.fixture
def make_question(db_session):
    """Factory inserting a question straight into the store"""
    repository = QuestionRepository(db_session)
    counter = {"n": 0}

    def _make(category="general", answer="B", options=None, text=None, explanation=""):
        counter["n"] += 1
        return repository.create(
            {
                "question": text or f"Question {counter['n']}?",
                "options": options or ["A", "B", "C", "D"],
                "answer": answer,
                "category": category,
                "explanation": explanation,
            }
        )

    return _make


@pytest.fixture
def make_user(db_session):
    repository = UserRepository(db_session)

    def _make(username="alice", role="student"):
        return repository.create(
            {"username": username, "email": f"{username}@example.com", "role": role}
        )

    return _make
