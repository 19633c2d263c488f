"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("HASH_ROUNDS", "4")
os.environ.setdefault("MAIL_SUPPRESS_SEND", "true")
os.environ.setdefault("ENVIRONMENT", "test")


def to_test_database_url(url: str) -> str:
    """Point a database URL at the test database, keeping host and credentials."""
    # Only the last path segment is the database name; the user name also says "bluestar"
    return url.rsplit("/", 1)[0] + "/bluestar_test"


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = to_test_database_url(os.getenv("DATABASE_URL"))
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from bluestar.database import Base, Database, get_db  # noqa: E402
from bluestar.main import app  # noqa: E402
from bluestar.services.email import get_email_service  # noqa: E402

test_database = Database(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = test_database.session_factory

VOLUNTEER = {
    "email": "j@x.com",
    "password": "Abc12345!",
    "firstName": "Jo",
    "lastName": "Doe",
    "phoneNumber": "+15551234567",
    "gender": "MALE",
    "userType": "VOLUNTEER",
}


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id, email and raw token."""

    def __init__(
        self,
        *args,
        user_id: int | None = None,
        email: str | None = None,
        token: str | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.token = token


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    test_database.create_all()
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
def email_service():
    """Email service double that records OTP sends instead of using SMTP."""
    service = MagicMock()
    service.send_otp = AsyncMock()
    return service


@pytest.fixture(scope="function")
def client(db, email_service):
    """Create a test client with database and email overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def volunteer():
    """A valid volunteer registration body."""
    return dict(VOLUNTEER)


@pytest.fixture
def service_member():
    """A valid service member registration body."""
    return {
        **VOLUNTEER,
        "email": "sm@x.com",
        "firstName": "Sam",
        "userType": "SERVICE_MEMBER",
        "branch": "NAVY",
        "addressLineOne": "1 Harbor Way",
        "city": "Norfolk",
        "state": "VA",
        "zipCode": "23511",
    }


@pytest.fixture
def auth_headers(client, volunteer):
    """Register and log in a volunteer, returning auth headers with user info."""
    response = client.post("/auth/register", json=volunteer)
    assert response.status_code == 201

    response = client.post(
        "/auth/login", json={"email": volunteer["email"], "password": volunteer["password"]}
    )
    assert response.status_code == 200
    token = response.json()["token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=me.json()["id"],
        email=volunteer["email"],
        token=token,
    )
