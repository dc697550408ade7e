"""Pytest fixtures."""

import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from sandycal.core.security import create_access_token
from sandycal.db.base import Base
from sandycal.db.session import get_db
from sandycal.main import app
from sandycal.models import DayRating, Friendship, User  # noqa: F401 - register for create_all
from sandycal.services.user_service import mark_phone_verified

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def setup_db():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(setup_db):
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def session_factory(setup_db):
    """Sessionmaker for tests that need more than one connection."""
    return TestingSessionLocal


@pytest.fixture
def client(setup_db):
    """Test client with overridden DB."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


_phones = itertools.count(5550000001)


@pytest.fixture
def make_user(db):
    """Create a user; verified unless told otherwise."""

    def _make(name: str | None = None, phone: str | None = None, verified: bool = True) -> User:
        phone = phone or f"+1{next(_phones)}"
        if verified:
            return mark_phone_verified(db, phone, name)
        user = User(phone=phone, name=name, is_phone_verified=False)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def auth_headers():
    """Bearer headers for a user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers
