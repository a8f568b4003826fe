"""Shared pytest fixtures for finfly tests."""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_SECRET", "finfly-test-secret-with-enough-length-0123456789")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from finfly.db.schema import Base  # noqa: E402


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    """TestClient whose requests use the in-memory engine."""
    from finfly.api.app import create_app
    from finfly.api.deps import get_db_session

    app = create_app()

    def override_get_db():
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_db_session] = override_get_db
    return TestClient(app)


def register(client, name="Ana", email="ana@example.com", password="secret123"):
    """Register a user through the API and return (user, auth headers)."""
    response = client.post(
        "/auth/register", json={"name": name, "email": email, "password": password}
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return data["user"], {"Authorization": f"Bearer {data['token']}"}


@pytest.fixture
def auth_headers(client):
    """Auth headers for a freshly registered user."""
    _, headers = register(client)
    return headers


@pytest.fixture
def other_headers(client):
    """Auth headers for a second, unrelated user."""
    _, headers = register(client, name="Bruno", email="bruno@example.com")
    return headers


@pytest.fixture
def make_user(client):
    """Factory registering extra users: make_user(email=...) -> (user, headers)."""

    def _make_user(**kwargs):
        return register(client, **kwargs)

    return _make_user
