"""Pytest configuration and fixtures."""

import os

# Tests always run against a local SQLite file; set before the app reads settings
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ.setdefault("ENVIRONMENT", "test")

from unittest.mock import AsyncMock, MagicMock, patch  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src import models  # noqa: E402, F401
from src.api.dependencies import get_llm_service  # noqa: E402
from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.models.user import User, default_preferences  # noqa: E402
from src.services.auth import get_password_hash  # noqa: E402
from src.services.email import EmailService  # noqa: E402
from src.services.llm import LLMService  # noqa: E402

DEFAULT_PASSWORD = "testpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.drop_all(bind=engine)
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


@pytest.fixture(autouse=True)
def sent_emails():
    """Capture verification emails instead of calling the provider."""
    with patch.object(EmailService, "send_verification_email") as mock_send:
        yield mock_send


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Factory creating users directly in the database, verified by default."""

    def _make_user(
        email: str = "test@example.com",
        name: str = "Test User",
        password: str = DEFAULT_PASSWORD,
        verified: bool = True,
        role: str = "user",
    ) -> User:
        user = User(
            email=email,
            name=name,
            password_hash=get_password_hash(password),
            is_verified=verified,
            role=role,
            preferences=default_preferences(),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def login(client):
    """Log in through the API and return auth headers."""

    def _login(email: str, password: str = DEFAULT_PASSWORD) -> AuthHeaders:
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.json()
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['token']}"}, user_id=data["user"]["id"]
        )

    return _login


@pytest.fixture
def auth_headers(make_user, login):
    """Create a user and return auth headers with user info."""
    make_user("test@example.com", "Test User")
    return login("test@example.com")


@pytest.fixture
def other_headers(make_user, login):
    """A second, unrelated user."""
    make_user("other@example.com", "Other User")
    return login("other@example.com")


@pytest.fixture
def admin_headers(make_user, login):
    make_user("admin@example.com", "Admin User", role="admin")
    return login("admin@example.com")


@pytest.fixture
def mock_llm():
    """Replace the LLM service with an AsyncMock-backed stand-in."""
    llm = MagicMock(spec=LLMService)
    llm.generate = AsyncMock(return_value="")
    llm.generate_json = AsyncMock(return_value=[])
    app.dependency_overrides[get_llm_service] = lambda: llm
    yield llm
    app.dependency_overrides.pop(get_llm_service, None)
