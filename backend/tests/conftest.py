"""Shared pytest fixtures.

Every test gets its own SQLite database file so threads in concurrency tests
can open independent connections.
"""

import os

# Must be set before any app module reads config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

import models  # noqa: F401  registers every table on Base.metadata
from database import Base, build_engine, get_db
from main import app
from models.user import User


@pytest.fixture
def engine(tmp_path):
    """Engine bound to a throwaway SQLite file with the full schema."""
    engine = build_engine(f"sqlite:///{tmp_path / 'progress_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory) -> TestClient:
    """Test client whose requests use the per-test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db_session: Session) -> User:
    """Create a learner with no activity."""
    user = User(name="Test Learner", email="learner@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session: Session) -> User:
    """A second learner for isolation checks."""
    user = User(name="Other Learner", email="other@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user
