"""Pytest fixtures and configuration for focuslist tests."""

import pytest
from datetime import datetime
from unittest.mock import MagicMock
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from focuslist.database.database import Base
from focuslist.database import models  # noqa: F401
from focuslist.database.todo_repository import TodoRepository
from focuslist.engine.rate_limiter import RateLimitStatus
from focuslist.endpoints.common import RequestContext
from focuslist.models.user import User


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


class AllowAllRateLimiter:
    """Rate limiter stand-in that never denies; records what it was asked."""

    def __init__(self):
        self.calls = []

    def limit(self, db, name, key, count=1):
        self.calls.append((name, key))
        return RateLimitStatus(ok=True)


class DenyAllRateLimiter:
    """Rate limiter stand-in that always denies with a fixed retry hint."""

    def __init__(self, retry_after_ms=1500):
        self.retry_after_ms = retry_after_ms

    def limit(self, db, name, key, count=1):
        return RateLimitStatus(ok=False, retry_after_ms=self.retry_after_ms)


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def other_user_id():
    return "other-user-456"


@pytest.fixture(scope="function")
def db_session(test_user_id, other_user_id):
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    Also creates two users in the database.
    """
    from focuslist.database.models import UserDB

    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    # Users are required for foreign key constraints
    now = datetime.utcnow()
    session.add(UserDB(
        id=test_user_id,
        email="test@example.com",
        name="Test User",
        password_hash="unused",
        created_at=now,
        updated_at=now,
    ))
    session.add(UserDB(
        id=other_user_id,
        email="other@example.com",
        name="Other User",
        password_hash="unused",
        created_at=now,
        updated_at=now,
    ))
    session.commit()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_user(test_user_id):
    """Create a test user object."""
    now = datetime.utcnow()
    return User(
        id=test_user_id,
        email="test@example.com",
        name="Test User",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def other_user(other_user_id):
    now = datetime.utcnow()
    return User(
        id=other_user_id,
        email="other@example.com",
        name="Other User",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def rate_limiter():
    return AllowAllRateLimiter()


@pytest.fixture
def ctx(db_session: Session, test_user, rate_limiter):
    """Request context for the test user with limits disabled."""
    return RequestContext(db=db_session, user=test_user, rate_limiter=rate_limiter)


@pytest.fixture
def other_ctx(db_session: Session, other_user):
    return RequestContext(db=db_session, user=other_user, rate_limiter=AllowAllRateLimiter())


@pytest.fixture
def limited_ctx(db_session: Session, test_user):
    """Request context whose rate limiter denies everything (1.5s retry hint)."""
    return RequestContext(db=db_session, user=test_user, rate_limiter=DenyAllRateLimiter(1500))


@pytest.fixture
def denying_rate_limiter():
    return DenyAllRateLimiter(2500)


@pytest.fixture
def anon_ctx(db_session: Session):
    """Request context with no authenticated caller."""
    return RequestContext(db=db_session, user=None, rate_limiter=AllowAllRateLimiter())


@pytest.fixture
def todo_repository(db_session: Session):
    """Create a TodoRepository instance for testing."""
    return TodoRepository(db_session)


@pytest.fixture
def email_sender():
    """Email client double; `send_email` succeeds unless a test sets a side effect."""
    sender = MagicMock()
    sender.send_email.return_value = "msg-123"
    return sender


def _override_db(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it
    return override_get_db


@pytest.fixture
def test_client(db_session: Session, test_user, email_sender):
    """FastAPI test client with overridden database, authentication, rate limiting and email."""
    from focuslist.api.app import app
    from focuslist.database.database import get_db
    from focuslist.auth.dependencies import get_auth_user, get_rate_limiter, get_email_sender

    limiter = AllowAllRateLimiter()
    app.dependency_overrides[get_db] = _override_db(db_session)
    app.dependency_overrides[get_auth_user] = lambda: test_user
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    # No context manager: startup would initialize the real database.
    client = TestClient(app)
    yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(db_session: Session, email_sender):
    """Test client with real bearer-token authentication."""
    from focuslist.api.app import app
    from focuslist.database.database import get_db
    from focuslist.auth.dependencies import get_rate_limiter, get_email_sender

    limiter = AllowAllRateLimiter()
    app.dependency_overrides[get_db] = _override_db(db_session)
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
