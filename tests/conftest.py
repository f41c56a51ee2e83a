"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from blog.api.dependencies import get_file_service
from blog.config import Settings
from blog.database import Base, get_db
from blog.main import app
from blog.models.category import Category
from blog.models.post import Post
from blog.models.user import User
from blog.services.files import FileService


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use a sibling PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").rsplit("/", 1)[0] + "/blog_test"
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
    # Don't drop database - just leave it for next run (each test cleans up after itself)


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
def settings():
    """Settings with a known signing secret."""
    return Settings(
        database_url=SQLALCHEMY_DATABASE_URL,
        jwt_secret="test-secret",
        google_client_id="test-client-id",
        google_client_secret="test-client-secret",
    )


@pytest.fixture
def upload_dir(tmp_path):
    """Temporary upload root."""
    return tmp_path / "uploads"


@pytest.fixture(scope="function")
def client(db, upload_dir):
    """Create a test client with database and upload directory overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_service] = lambda: FileService(upload_dir)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, email: str, name: str = "Test User") -> AuthHeaders:
    """Register a user and return bearer headers for it."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": "testpass123", "name": name},
    )
    assert response.status_code == 201
    data = response.json()
    # Registration also sets a session cookie; tests authenticate explicitly
    client.cookies.clear()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client, "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return register(client, "other@example.com", name="Other User")


@pytest.fixture
def author(db):
    """A local user persisted directly, for repository tests."""
    user = User(name="Ada", email="ada@example.com", password_hash="fake", auth_provider="local")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def make_post(db, author):
    """Factory for posts stored directly, bypassing slug generation."""

    def _make_post(slug: str, title: str | None = None) -> Post:
        post = Post(title=title or slug, slug=slug, content="Some content", user_id=author.id)
        db.add(post)
        db.commit()
        db.refresh(post)
        return post

    return _make_post


@pytest.fixture
def make_category(db):
    """Factory for categories stored directly, bypassing slug generation."""

    def _make_category(slug: str, title: str | None = None) -> Category:
        category = Category(title=title or slug, slug=slug)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    return _make_category
