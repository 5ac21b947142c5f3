"""
Shared test fixtures.

Route tests run the real app against a throwaway SQLite file per test, with the
settings, mailer and Google client swapped through ``app.dependency_overrides``.
"""

import asyncio
import os

os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from core.config import Settings, get_settings
from database import get_db, init_models
from dependencies.services import get_email_service, get_google_client
from main import app
from utils.exceptions import InvalidFederatedTokenError
from utils.google_oauth import GoogleIdentity

TEST_JWT_SECRET = "test-secret-key-for-testing-only"
STRONG_PASSWORD = "Password123"


class FakeEmailService:
    """Records outgoing mail instead of talking to SMTP."""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_verification_email(self, email: str, token: str, first_name: str):
        if self.fail:
            raise ConnectionError("SMTP server unavailable")
        self.sent.append(("verification", email, token))

    async def send_password_reset_email(self, email: str, token: str, first_name: str):
        if self.fail:
            raise ConnectionError("SMTP server unavailable")
        self.sent.append(("reset", email, token))


class FakeGoogleClient:
    """Accepts only ID tokens registered in ``identities``."""

    def __init__(self):
        self.identities: dict[str, GoogleIdentity] = {}

    def authorization_url(self) -> str:
        return "https://accounts.google.com/o/oauth2/auth?client_id=test-client-id"

    async def verify_id_token(self, token: str) -> GoogleIdentity:
        if token not in self.identities:
            raise InvalidFederatedTokenError()
        return self.identities[token]


def make_settings(**overrides) -> Settings:
    values = dict(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        JWT_SECRET=TEST_JWT_SECRET,
        GOOGLE_CLIENT_ID="test-client-id.apps.googleusercontent.com",
        GOOGLE_CLIENT_SECRET="test-client-secret",
        GOOGLE_REDIRECT_URI="http://localhost:3000/auth/google/callback",
    )
    values.update(overrides)
    return Settings(**values)


def _database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def mailer() -> FakeEmailService:
    return FakeEmailService()


@pytest.fixture
def google() -> FakeGoogleClient:
    return FakeGoogleClient()


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(_database_url(tmp_path), poolclass=NullPool)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_sessions(db_engine):
    """Session factory for tests that need several independent sessions on one database."""
    return async_sessionmaker(bind=db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(db_sessions):
    """An AsyncSession bound to a fresh SQLite file, for service-level tests."""
    async with db_sessions() as session:
        yield session


@pytest.fixture
def session_factory(tmp_path):
    # NullPool: the TestClient runs each request on its own event loop
    engine = create_async_engine(_database_url(tmp_path), poolclass=NullPool)
    asyncio.run(init_models(engine))
    yield async_sessionmaker(bind=engine, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def client(session_factory, settings, mailer, google):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_email_service] = lambda: mailer
    app.dependency_overrides[get_google_client] = lambda: google
    yield TestClient(app)
    app.dependency_overrides.clear()


def register_user(client: TestClient, email: str = "creator@example.com", password: str = STRONG_PASSWORD, **extra):
    body = {"email": email, "password": password, "firstname": "Jane", "lastname": "Doe"}
    body.update(extra)
    return client.post("/auth/register", json=body)


def auth_headers_for(client: TestClient, email: str = "creator@example.com", password: str = STRONG_PASSWORD) -> dict:
    response = register_user(client, email=email, password=password)
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
