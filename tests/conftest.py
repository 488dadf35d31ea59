"""Pytest configuration and fixtures."""

import os
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_storage_service
from src.database import Base, get_db
from src.errors import StorageError
from src.main import app
from src.models.user import User
from src.services.analytics_service import AnalyticsService
from src.services.storage import StorageService


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


class FakeStorage(StorageService):
    """In-memory bucket. Keys listed in ``fail_keys`` raise on delete."""

    def __init__(self):
        super().__init__(client=MagicMock())
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_keys: set[str] = set()

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        self.objects[key] = data
        return f"https://cdn.test/{key}"

    def delete(self, key: str) -> None:
        if key in self.fail_keys:
            raise StorageError("simulated outage")
        self.objects.pop(key, None)
        self.deleted.append(key)


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/press_kits", "/press_kits_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def storage():
    """In-memory object storage."""
    return FakeStorage()


@pytest.fixture(autouse=True)
def background_tasks(db):
    """Run view recording inline against the test session; capture purges."""

    def record_inline(press_kit_id, **kwargs):
        AnalyticsService(db).record_view(press_kit_id, **kwargs)

    with (
        patch(
            "src.tasks.analytics.record_press_kit_view.delay", side_effect=record_inline
        ) as record_view,
        patch("src.tasks.storage.purge_storage_objects.delay") as purge,
    ):
        yield {"record_view": record_view, "purge": purge}


@pytest.fixture
def sent_emails():
    """Capture outgoing email instead of talking to an SMTP relay."""
    with patch("src.services.auth.send_email") as mock_send:
        yield mock_send


@pytest.fixture(scope="function")
def client(db, storage):
    """Create a test client with database and storage overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_service] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Factory that registers a user through the API and returns auth headers."""

    def _register(email: str = "test@example.com", password: str = "testpass123") -> AuthHeaders:
        response = client.post(
            "/api/auth/register",
            json={
                "email": email,
                "password": password,
                "first_name": "Test",
                "last_name": "User",
            },
        )
        assert response.status_code == 201
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['token']}"},
            user_id=data["user"]["id"],
            email=data["user"]["email"],
        )

    return _register


@pytest.fixture
def auth_headers(register_user):
    """Create a user and return auth headers with user info."""
    return register_user()


@pytest.fixture
def admin_headers(client, db):
    """Create an admin directly in the database and log in through the API."""
    admin = User(email="admin@example.com", first_name="Site", last_name="Admin", is_admin=True)
    admin.set_password("adminpass123")
    db.add(admin)
    db.commit()

    response = client.post(
        "/api/auth/login", json={"email": "admin@example.com", "password": "adminpass123"}
    )
    assert response.status_code == 200
    return AuthHeaders(
        {"Authorization": f"Bearer {response.json()['token']}"},
        user_id=admin.id,
        email=admin.email,
    )


@pytest.fixture
def press_kit(client, auth_headers):
    """A draft press kit owned by the auth_headers user."""
    response = client.post(
        "/api/press-kits",
        headers=auth_headers,
        json={"title": "My Band", "template": "classic"},
    )
    assert response.status_code == 201
    return response.json()["data"]
